from newest_check.main import main

raise SystemExit(main())
