from inventory_api.cli import main

main()
