# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

from devbox.cli import main

if __name__ == "__main__":
    main()
