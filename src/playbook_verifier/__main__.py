import sys

from playbook_verifier.cli import main

sys.exit(main())
