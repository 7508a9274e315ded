from seat_chase.cli import main

main()
