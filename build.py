#!/usr/bin/env python3
from mdpage.cli import main

if __name__ == "__main__":
    main()
