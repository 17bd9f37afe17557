from syrinc.cli import main

main()
