from put.cli import main

main()
