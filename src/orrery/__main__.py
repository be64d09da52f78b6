from orrery.app import main


main()
