# --------------------------------------------------------------
# File: __main__.py
# Description: Permite ejecutar la CLI con ``python -m crypte``.
# --------------------------------------------------------------

import sys

from crypte.cli import main

sys.exit(main())
