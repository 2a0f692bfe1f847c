from planeflap.main import main

main()
