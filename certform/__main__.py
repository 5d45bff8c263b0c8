from certform.cli import main

main()
