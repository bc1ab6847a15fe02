from pkgfzf.cli import main

main()
