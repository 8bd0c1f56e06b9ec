from tagscope.cli import main

main()
