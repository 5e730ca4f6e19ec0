from asset_embed.cli import main

raise SystemExit(main())
