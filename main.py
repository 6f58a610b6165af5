#!/usr/bin/env python3
"""
Google Photos metadata matcher

Sets the creation and modification times of exported media files to the
photoTakenTime recorded in their Google Takeout JSON sidecars.
"""
import sys

from takeout_matcher.main import main

if __name__ == '__main__':
	sys.exit(main())
