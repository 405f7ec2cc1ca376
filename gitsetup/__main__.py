from gitsetup.cli import main

raise SystemExit(main())
