from goalflow.cli import main

raise SystemExit(main())
