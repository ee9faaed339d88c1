#!/usr/bin/env python3

import sys

from jobshop.main import main

if __name__ == "__main__":
    sys.exit(main())
