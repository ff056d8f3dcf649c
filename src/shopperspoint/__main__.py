from shopperspoint.cli import main

main()
