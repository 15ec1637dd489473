import sys

from xsdguard.cli import main

sys.exit(main())
