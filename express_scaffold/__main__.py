from express_scaffold.cli import main

main()
