class AudioMetadataError(RuntimeError):
    pass


class FfmpegNotFound(AudioMetadataError):
    pass


class MetadataReadFailed(AudioMetadataError):
    pass


class MetadataWriteFailed(AudioMetadataError):
    pass
