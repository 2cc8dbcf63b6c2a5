from dirsize.cli import main

main()
