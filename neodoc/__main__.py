from neodoc.cli import main

raise SystemExit(main())
