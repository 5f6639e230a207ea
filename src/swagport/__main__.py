"""Allow ``python -m swagport``."""

from swagport.app import main

main()
