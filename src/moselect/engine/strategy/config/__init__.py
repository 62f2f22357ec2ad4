"""Strategy configuration module.

Frozen configuration dataclasses and fluent builders for every selection
strategy.

Examples:
    from moselect.engine.strategy.config import MOEADConfig, NSGAIIIConfig

    # Fluent builder
    cfg = MOEADConfig().h(12).neighbourhood(20).fixed()

    # Quick defaults
    cfg = NSGAIIIConfig.default(n_obj=3)

    # Flat settings mapping, e.g. loaded from YAML
    cfg = MOEADConfig.from_settings({"h": 12, "t": 20, "external-pop": False})
"""

from .grea import GrEAConfig, GrEAConfigData
from .hype import HypEConfig, HypEConfigData
from .ibea import IBEAConfig, IBEAConfigData
from .mochc import MOCHCConfig, MOCHCConfigData
from .moead import MOEADConfig, MOEADConfigData
from .mopso import OMOPSOConfig, OMOPSOConfigData, SMPSOConfig, SMPSOConfigData
from .nsgaii import NSGAIIConfig, NSGAIIConfigData
from .nsgaiii import NSGAIIIConfig, NSGAIIIConfigData
from .paes import PAESConfig, PAESConfigData, PAESLambdaConfig, PAESLambdaConfigData
from .par import PARConfig, PARConfigData
from .rvea import RVEAConfig, RVEAConfigData
from .smsemoa import SMSEMOAConfig, SMSEMOAConfigData
from .spea2 import SPEA2Config, SPEA2ConfigData
from .ssemoea import SSeMOEAConfig, SSeMOEAConfigData

__all__ = [
    "GrEAConfig",
    "GrEAConfigData",
    "HypEConfig",
    "HypEConfigData",
    "IBEAConfig",
    "IBEAConfigData",
    "MOCHCConfig",
    "MOCHCConfigData",
    "MOEADConfig",
    "MOEADConfigData",
    "OMOPSOConfig",
    "OMOPSOConfigData",
    "SMPSOConfig",
    "SMPSOConfigData",
    "NSGAIIConfig",
    "NSGAIIConfigData",
    "NSGAIIIConfig",
    "NSGAIIIConfigData",
    "PAESConfig",
    "PAESConfigData",
    "PAESLambdaConfig",
    "PAESLambdaConfigData",
    "PARConfig",
    "PARConfigData",
    "RVEAConfig",
    "RVEAConfigData",
    "SMSEMOAConfig",
    "SMSEMOAConfigData",
    "SPEA2Config",
    "SPEA2ConfigData",
    "SSeMOEAConfig",
    "SSeMOEAConfigData",
]
