from growthfit.cli import main

raise SystemExit(main())
