"""
sso-oracle CLI - differential checking of small-string-optimized text

Commands:
- sso-oracle fuzz - Sample random cases per layout mode
- sso-oracle replay - Re-run a recorded case
- sso-oracle version - Show version and inline thresholds
"""

__version__ = "0.1.0"
