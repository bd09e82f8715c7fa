"""Allow ``python -m collect_inventory``."""

from collect_inventory.main import main

main()
