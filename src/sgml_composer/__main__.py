"""Allow ``python -m sgml_composer``."""

import sys

from sgml_composer.cli import main

sys.exit(main())
