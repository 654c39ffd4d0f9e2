"""Stand-in configuration wiring tool: appends the package name to wired.log."""
import os
import sys


def main(argv):
    name, path = argv[0], argv[1]
    if not os.path.isdir(path):
        sys.stderr.write(f"fake wire: {path} is not a directory\n")
        return 1
    with open("wired.log", "a", encoding="utf-8") as fh:
        fh.write(name + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
