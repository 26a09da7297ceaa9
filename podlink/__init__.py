from podlink.errors import ConfigurationError
from podlink.config import Config, DefaultTargetStrategy
