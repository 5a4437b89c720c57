"""
package: mstair.emailparts
"""

# <AUTOGEN_INIT>
from mstair.emailparts import (
    config,
    email_parts,
    errors,
    grammar,
    xlogging,
)


__all__ = [
    "config",
    "email_parts",
    "errors",
    "grammar",
    "xlogging",
]
# </AUTOGEN_INIT>

__version__ = "0.1.0"
