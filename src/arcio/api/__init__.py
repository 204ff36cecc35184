"""
Host-facing interfaces for ARCIO.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""
