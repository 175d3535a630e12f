import sys

from legacy_agents.main import main

sys.exit(main())
