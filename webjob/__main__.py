from webjob.main import main

main()
