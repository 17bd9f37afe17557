from __future__ import annotations

import logging
from pathlib import Path
import sys

import typer

from syrinc.audio.errors import AudioMetadataError
from syrinc.audio.metadata import AudioMetadata
from syrinc.config import AppConfig, load_config, save_config_invert
from syrinc.logging_setup import setup_logging
from syrinc.lrc.files import UnsupportedEncoding, atomic_write_lines, read_lrc_lines, split_lines
from syrinc.lrc.process import OFFSET_TAGS, build_options, process_lyrics
from syrinc.lrc.tags import extract_tags
from syrinc.lrc.tokens import join_lines

logger = logging.getLogger(__name__)

IN_PLACE = ":in:"

EXAMPLES = """
Examples:
  Embed an .lrc file into the audio metadata in place
    syrinc fix audio.flac -l lyrics.lrc -s :in:

  Export audio lyrics metadata to an external .lrc file
    syrinc fix audio.flac -s lyrics.lrc

  Apply a custom offset and overwrite the source file
    syrinc fix audio.flac -o 500 -s :in:

  Correct timestamps of a standalone .lrc
    syrinc fix lyrics.lrc -s :in:
"""

app = typer.Typer(no_args_is_help=True, add_completion=False, epilog=EXAMPLES)


def _emit(lines: list[str], target: Path | None, cfg: AppConfig) -> None:
    if target is None or str(target) == "-":
        typer.echo(join_lines(lines).encode("utf-8", errors="surrogateescape"))
    else:
        atomic_write_lines(target, lines, cfg)


def _fix_audio(
    cfg: AppConfig,
    audio: Path,
    target: Path | None,
    link_lrc: Path | None,
    options: str,
) -> None:
    meta = AudioMetadata(cfg)
    if link_lrc is not None:
        source = read_lrc_lines(link_lrc)
    else:
        source = meta.read_field(audio)

    lines = process_lyrics(source, options)
    if not lines:
        logger.warning("Input audio file had no lyrics metadata")

    if target is None or str(target) == "-" or target.suffix.lower() == ".lrc":
        _emit(lines, target, cfg)
    else:
        meta.replace_lyrics(audio, target, lines)


@app.command()
def fix(
    file: Path = typer.Argument(..., help="Input .lrc or audio file, - to read .lrc data from stdin"),
    link_lrc: Path | None = typer.Option(
        None, "--link-lrc", "-l", help="Use this .lrc instead of the lyrics stored in the audio file"
    ),
    save_as: str | None = typer.Option(
        None, "--save-as", "-s", help=f"Output path (default: stdout, {IN_PLACE} overwrites the input)"
    ),
    offset: int | None = typer.Option(None, "--offset", "-o", help="Override the file offset, in ms"),
    invert: bool | None = typer.Option(
        None, "--invert/--no-invert", "-i", help="Invert the offset sign (default: saved config)"
    ),
    drop_metadata: bool = typer.Option(False, "--drop-metadata", "-d", help="Drop ti/ar/al/... tags"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Correct .lrc timestamps against their [offset] tag, standalone or inside an audio file.
    """
    cfg = load_config()
    setup_logging(debug)

    use_stdin = str(file) == "-"
    if not use_stdin and not file.exists():
        typer.echo(f'File "{file}" does not exist.', err=True)
        raise typer.Exit(code=1)

    if save_as == IN_PLACE:
        if use_stdin:
            typer.echo(f"Cannot use {IN_PLACE} when reading from stdin.", err=True)
            raise typer.Exit(code=1)
        target: Path | None = file
    else:
        target = Path(save_as) if save_as else None

    if offset == 0:
        logger.warning('-o 0 means "use file offset"; file offset will be used')
    if invert is None:
        invert = cfg.invert_offset

    treat_as_audio = not use_stdin and file.suffix.lower() != ".lrc"

    try:
        if treat_as_audio:
            if (
                target is not None
                and str(target) != "-"
                and target.suffix.lower() not in (file.suffix.lower(), ".lrc")
            ):
                typer.echo(
                    "Source and destination extension must be the same, except for exporting an .lrc file.",
                    err=True,
                )
                raise typer.Exit(code=1)
            # metadata tags would show up in players as lyric lines
            options = build_options(offset or 0, invert, drop_metadata=True)
            logger.debug("Processing lyrics with options '%s'", options)
            _fix_audio(cfg, file, target, link_lrc, options)
        else:
            if link_lrc is not None:
                logger.warning("Both inputs are .lrc files, ignoring --link-lrc")
            options = build_options(offset or 0, invert, drop_metadata)
            logger.debug("Processing lyrics with options '%s'", options)
            source = split_lines(sys.stdin.read()) if use_stdin else read_lrc_lines(file)
            lines = process_lyrics(source, options)
            if not lines:
                logger.warning("Input had no lyrics")
            _emit(lines, target, cfg)
    except (UnsupportedEncoding, AudioMetadataError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def show(lrc_path: Path):
    """Print the tags found on every line of an .lrc file."""
    try:
        lines = read_lrc_lines(lrc_path)
    except (UnsupportedEncoding, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    timed = 0
    offsets: list[str] = []
    for i, line in enumerate(lines, 1):
        tags = extract_tags(line)
        if not tags:
            continue
        timed += any(t.name == "time" for t in tags)
        offsets.extend(t.value for t in tags if t.name in OFFSET_TAGS)
        typer.echo(f"{i}: " + " ".join(f"{t.name}={t.value}" for t in tags))

    typer.echo(f"lines_total={len(lines)}")
    typer.echo(f"lines_with_timestamps={timed}")
    typer.echo(f"offsets={offsets}")


@app.command()
def config(
    invert: bool | None = typer.Option(
        None, "--invert/--no-invert", help="Invert the offset sign by default"
    ),
):
    """Show or change persistent defaults."""
    if invert is not None:
        path = save_config_invert(invert)
        typer.echo(f"Saved: {path}")
    cfg = load_config()
    typer.echo(f"invert_offset={cfg.invert_offset}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
