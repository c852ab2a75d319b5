from klsp.apps.cli import main

main()
