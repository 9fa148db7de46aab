from antwar.cli import main

raise SystemExit(main())
