from tailtype.cmdline import main

main()
