"""
Allows running the CLI with ``python -m taskflow``
"""

import sys
from taskflow.main import main

sys.exit(main())
