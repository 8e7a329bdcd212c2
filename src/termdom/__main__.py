from termdom.app import main

main()
