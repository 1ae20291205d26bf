"""smoggytexas - EC2 spot price history across every AWS region"""

__version__ = "0.3.0"
