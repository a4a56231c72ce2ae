import sys

# The command line interface lives in src/fontpair/cli.py; this runner lets
# the project be used from a checkout without installing it.
try:
    from src.fontpair.cli import main
except ImportError as e:
    print("Error: Could not import the FontPair command line interface.")
    print("Please ensure the project structure is correct (e.g., src/fontpair/cli.py exists)")
    print("and the dependencies are installed (pip install -e .).")
    print(f"Details: {e}")
    sys.exit(1)


if __name__ == '__main__':
    sys.exit(main())
