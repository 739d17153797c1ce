from cre_workflow_toolkit.main import main

raise SystemExit(main())
