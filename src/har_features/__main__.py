import sys

from har_features.cli import main

sys.exit(main())
