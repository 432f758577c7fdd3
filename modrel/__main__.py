from modrel.cli.app import main

main()
