from profiler.cli.profile_cli import main

raise SystemExit(main())
