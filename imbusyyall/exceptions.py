"""
Exceptions raised while configuring a run
"""


class ConfigError(Exception):
    """Invalid or unreadable configuration"""


class PacingConfigError(ConfigError, ValueError):
    """Pacing parameters that would produce nonsensical delays"""
