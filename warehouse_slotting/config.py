import os
import configparser
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Tuple

from warehouse_slotting.exceptions import ConfigError
from warehouse_slotting.models import VELOCITY_BANDS

DEFAULT_CONFIG_PATH = Path('config') / 'settings.ini'


def _parse_bands(raw) -> Tuple[int, ...]:
    try:
        if isinstance(raw, str):
            parts = [p.strip() for p in raw.split(',') if p.strip()]
        else:
            parts = list(raw)
        return tuple(int(p) for p in parts)
    except (TypeError, ValueError):
        raise ConfigError(f"Distance bands must be integers, got {raw!r}", code='BANDS')


@dataclass(frozen=True)
class SlottingSettings:
    """Tunable parameters of the slotting engine.
    
    Attributes:
        distance_bands: Inclusive upper distance limits for FAST_MOVER, A, B and C.
            Anything beyond the last limit is SLOW_MOVER.
        golden_zone_fraction: Share of candidates that form the golden zone, in (0, 1]
        target_fast_share: Intended share of FAST_MOVER + A locations in a zone
        rebalance_tolerance: Share of FAST_MOVER + A above which a zone needs rebalancing
        band_width: Distance units per ideal distance band, used for confidence scoring
    """
    distance_bands: Tuple[int, ...] = (20, 50, 100, 200)
    golden_zone_fraction: float = 0.20
    target_fast_share: float = 0.20
    rebalance_tolerance: float = 0.30
    band_width: int = 20

    def __post_init__(self):
        bands = _parse_bands(self.distance_bands)
        object.__setattr__(self, 'distance_bands', bands)

        expected = len(VELOCITY_BANDS) - 1
        if len(bands) != expected:
            raise ConfigError(
                f"Expected {expected} distance band limits, got {len(bands)}",
                code='BANDS', details={'distance_bands': bands}
            )
        if bands[0] < 0:
            raise ConfigError("Distance band limits must be non-negative", code='BANDS',
                              details={'distance_bands': bands})
        for lower, upper in zip(bands, bands[1:]):
            if upper <= lower:
                raise ConfigError(
                    f"Distance band limits must be strictly increasing: {lower} >= {upper}",
                    code='BANDS', details={'distance_bands': bands}
                )

        if not 0.0 < self.golden_zone_fraction <= 1.0:
            raise ConfigError(
                f"Golden zone fraction must be in (0, 1], got {self.golden_zone_fraction}",
                code='GOLDEN_ZONE'
            )
        if not 0.0 <= self.rebalance_tolerance <= 1.0:
            raise ConfigError(
                f"Rebalance tolerance must be in [0, 1], got {self.rebalance_tolerance}",
                code='REBALANCE'
            )
        if not 0.0 <= self.target_fast_share <= self.rebalance_tolerance:
            raise ConfigError(
                f"Target fast share {self.target_fast_share} must be between 0 and "
                f"the rebalance tolerance {self.rebalance_tolerance}",
                code='REBALANCE'
            )
        if self.band_width <= 0:
            raise ConfigError(f"Band width must be positive, got {self.band_width}",
                              code='BAND_WIDTH')

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> 'SlottingSettings':
        """Build settings from string values, e.g. an INI section.
        
        Missing keys fall back to the defaults.
        """
        defaults = cls()
        try:
            return cls(
                distance_bands=_parse_bands(values.get('distance_bands', defaults.distance_bands)),
                golden_zone_fraction=float(values.get('golden_zone_fraction', defaults.golden_zone_fraction)),
                target_fast_share=float(values.get('target_fast_share', defaults.target_fast_share)),
                rebalance_tolerance=float(values.get('rebalance_tolerance', defaults.rebalance_tolerance)),
                band_width=int(values.get('band_width', defaults.band_width)),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid slotting setting: {e}", code='PARSE')


class Config:
    """Configuration manager for the Warehouse Slotting System."""
    
    _instance = None
    
    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance
    
    def __init__(self):
        """Initialize the configuration if not already initialized."""
        if self._initialized:
            return
        self.load()
        self._initialized = True
    
    def load(self, path=None):
        """Load configuration from an INI file.
        
        The [SLOTTING] section is validated here, so a bad file is rejected
        before any slotting runs. On failure the previous configuration stays
        in place.
        
        Args:
            path: Optional path; defaults to $SLOTTING_CONFIG or config/settings.ini
            
        Raises:
            ConfigError: If the [SLOTTING] section holds invalid values
        """
        config_path = Path(path or os.environ.get('SLOTTING_CONFIG', DEFAULT_CONFIG_PATH))
        parser = configparser.ConfigParser(interpolation=None)
        self._set_defaults(parser)
        
        if config_path.exists():
            parser.read(config_path)
        
        settings = SlottingSettings.from_mapping(dict(parser['SLOTTING']))
        
        self._config_path = config_path
        self._config = parser
        self._slotting_settings = settings
    
    def _set_defaults(self, parser):
        """Populate default configuration values."""
        parser['SLOTTING'] = {
            'distance_bands': '20,50,100,200',
            'golden_zone_fraction': '0.20',
            'target_fast_share': '0.20',
            'rebalance_tolerance': '0.30',
            'band_width': '20'
        }
        
        parser['DATABASE'] = {
            'url': 'sqlite:///slotting.db',
            'echo': 'False'
        }
        
        parser['LOGGING'] = {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'directory': 'logs',
            'max_size_mb': '10',
            'backup_count': '5',
            'console_output': 'True',
            'file_output': 'False'
        }
        
        parser['BATCH_PROCESS'] = {
            'max_workers': '4'
        }
    
    def save(self):
        """Save configuration to file."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, 'w') as configfile:
            self._config.write(configfile)
    
    def get(self, section, key, default=None):
        """Get configuration value."""
        try:
            return self._config.get(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return default
    
    def get_int(self, section, key, default=None):
        """Get configuration value as integer."""
        try:
            return self._config.getint(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default
    
    def get_boolean(self, section, key, default=None):
        """Get configuration value as boolean."""
        try:
            return self._config.getboolean(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default
    
    def set(self, section, key, value):
        """Set configuration value in memory.
        
        Raises:
            ConfigError: If a [SLOTTING] value would make the slotting
                settings invalid; the old value is kept
        """
        if section == 'SLOTTING':
            values = dict(self._config['SLOTTING'])
            values[key] = str(value)
            self._slotting_settings = SlottingSettings.from_mapping(values)
        
        if not self._config.has_section(section):
            self._config.add_section(section)
        
        self._config.set(section, key, str(value))
    
    @property
    def slotting_settings(self) -> SlottingSettings:
        """Get the slotting settings validated by the last load or set."""
        return self._slotting_settings
    
    def get_db_url(self):
        """Get SQLAlchemy database URL."""
        return self.get('DATABASE', 'url', 'sqlite:///slotting.db')
    
    @property
    def log_config(self) -> Dict:
        """Get logging configuration."""
        return {
            'level': self.get('LOGGING', 'level', 'INFO'),
            'format': self.get('LOGGING', 'format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
            'directory': self.get('LOGGING', 'directory', 'logs'),
            'max_size_mb': self.get_int('LOGGING', 'max_size_mb', 10),
            'backup_count': self.get_int('LOGGING', 'backup_count', 5),
            'console_output': self.get_boolean('LOGGING', 'console_output', True),
            'file_output': self.get_boolean('LOGGING', 'file_output', False)
        }
    
    @property
    def batch_config(self) -> Dict:
        """Get batch process configuration."""
        return {
            'max_workers': self.get_int('BATCH_PROCESS', 'max_workers', 4)
        }

# Global config instance
config = Config()
