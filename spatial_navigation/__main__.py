from spatial_navigation.probe_cli import main

raise SystemExit(main())
