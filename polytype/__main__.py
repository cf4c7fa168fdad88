from polytype.cmdline import main

main()
