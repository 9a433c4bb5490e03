#!/usr/bin/env python
"""
SDF Forge CLI - Generate a signed distance field texture from an image

Usage:
    python main.py <input_image> [spread] [options]
"""

from sdf_forge.cli import main


if __name__ == '__main__':
    main()
