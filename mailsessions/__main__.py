from mailsessions.cli import main

raise SystemExit(main())
