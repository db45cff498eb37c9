"""Run: python -m chatcomic script.txt"""
import sys

from chatcomic.main import main

sys.exit(main())
