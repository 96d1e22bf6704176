import sys

from zmongo_workflow.runner import main

if __name__ == "__main__":
    sys.exit(main())
