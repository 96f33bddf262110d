"""Configuration module for brev_ssh.

Provides focused classes for different configuration concerns:
- Config: Main configuration class (resolved paths and settings)
- SSHConfigDocument: Parses and re-renders ~/.ssh/config
- Settings: Environment variable configuration
"""

from brev_ssh.config.main import Config
from brev_ssh.config.parser import ParseError, SSHConfigDocument
from brev_ssh.config.settings import Settings

__all__ = ["Config", "ParseError", "SSHConfigDocument", "Settings"]
