# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import sys

from typeshift.cli import main

sys.exit(main())
