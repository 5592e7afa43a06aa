from booklend.main import main

main()
