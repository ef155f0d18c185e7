import sys

from species_sim.cli import main

if __name__ == "__main__":
    sys.exit(main())
