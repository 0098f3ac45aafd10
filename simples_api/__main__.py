import sys

from simples_api.server import main

sys.exit(main())
