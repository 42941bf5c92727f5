import json
import os
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"

RNG_KINDS = ("secure", "seeded", "sequential")


class GeneratorConfig:
    __slots__ = ("node_id", "rng", "seed")

    def __init__(self, node_id=None, rng="secure", seed=None):
        if rng not in RNG_KINDS:
            raise ValueError(f"rng must be one of {RNG_KINDS}, got {rng!r}")
        self.node_id = node_id
        self.rng = rng
        self.seed = seed


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level", "crash_file")

    def __init__(self, level="INFO", crash_file="logs/crash.log"):
        self.level = level
        self.crash_file = crash_file


class Config:
    __slots__ = ("generator", "server", "logging")

    def __init__(self, generator=None, server=None, logging=None):
        self.generator = generator or GeneratorConfig()
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            GeneratorConfig(**d.get("generator", {})),
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
        )


def load_config(path=None):
    """Read config from `path`, $NULID_CONFIG, or the bundled config.json."""
    path = path or os.environ.get("NULID_CONFIG")
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))


def build_generator(config, clock=None):
    """Generator wired from a GeneratorConfig."""
    from nulid.generation.generator import Generator
    from nulid.sources.rng import SecureRng, SeededRng, SequentialRng

    if config.rng == "seeded":
        rng = SeededRng(config.seed)
    elif config.rng == "sequential":
        rng = SequentialRng(config.seed or 0)
    else:
        rng = SecureRng()
    return Generator(clock=clock, rng=rng, node=config.node_id)
