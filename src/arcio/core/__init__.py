"""
Core building blocks for ARCIO: the archive capability, registry, path
resolution, configuration, errors and logging.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""
