from __future__ import annotations

import json

import pytest

from moselect.engine.config import load_strategy_settings
from moselect.engine.strategy.config import (
    GrEAConfig,
    HypEConfig,
    IBEAConfig,
    MOCHCConfig,
    MOEADConfig,
    NSGAIIConfig,
    NSGAIIIConfig,
    OMOPSOConfig,
    PAESConfig,
    PAESLambdaConfig,
    PARConfig,
    RVEAConfig,
    SMPSOConfig,
    SSeMOEAConfig,
)
from moselect.foundation.exceptions import ConfigurationError, MissingConfigError


class TestBuilders:
    """Fluent builders produce frozen, validated configs."""

    def test_frozen(self):
        cfg = NSGAIIConfig.default()
        with pytest.raises(AttributeError):
            cfg.constraint_mode = "violation"  # type: ignore[misc]

    def test_serialization(self):
        cfg = MOEADConfig().h(12).neighbourhood(20).replacements(2).function("weighted_sum").fixed()
        assert cfg.to_dict() == {"h": 12, "t": 20, "nr": 2, "external_pop": True, "function": "weighted-sum"}
        assert json.loads(cfg.to_json())["h"] == 12

    def test_moead_requires_h(self):
        with pytest.raises(MissingConfigError, match="MOEADConfig.default()"):
            MOEADConfig().fixed()

    def test_moead_nr_not_above_t(self):
        with pytest.raises(ConfigurationError, match="cannot exceed"):
            MOEADConfig().h(10).neighbourhood(2).replacements(3).fixed()

    def test_nsgaiii_sources(self):
        assert NSGAIIIConfig.default(3).p1 == 12
        assert NSGAIIIConfig.default(8).p2 == 2
        assert NSGAIIIConfig().reference_file("points.csv").fixed().user_points
        with pytest.raises(ConfigurationError, match="file path"):
            NSGAIIIConfig().user_points().fixed()
        with pytest.raises(ConfigurationError, match="either 'p1'"):
            NSGAIIIConfig().fixed()

    def test_ibea_validation(self):
        assert IBEAConfig.default("hypervolume").indicator == "hypervolume"
        with pytest.raises(ConfigurationError):
            IBEAConfig().rho(0.5)
        with pytest.raises(ConfigurationError):
            IBEAConfig().kappa(0.0)
        with pytest.raises(ConfigurationError, match="Unsupported value"):
            IBEAConfig().indicator("r2")

    def test_hype_sampling(self):
        assert HypEConfig.default().sampling_size == 10000
        assert HypEConfig().exact().fixed().sampling_size == -1
        with pytest.raises(ConfigurationError):
            HypEConfig().sampling_size(0)

    def test_rvea_ranges(self):
        with pytest.raises(ConfigurationError, match=r"\[0, 1\]"):
            RVEAConfig().p1(4).fr(1.5)
        with pytest.raises(ConfigurationError):
            RVEAConfig().p1(4).alpha(-1)
        assert RVEAConfig().p1(4).fr(0).fixed().fr == 0.0

    def test_mochc_default(self):
        cfg = MOCHCConfig.default(genotype_length=40)
        assert cfg.initial_d == 10
        assert cfg.n_survivors is None
        with pytest.raises(ConfigurationError):
            MOCHCConfig().initial_d(-1).restart_d(1).fixed()

    def test_paes_lambda_defaults(self):
        cfg = PAESLambdaConfig.default()
        assert cfg.bisections == 5
        assert cfg.mu is None and cfg.lambda_ is None


class TestFromSettings:
    """Flat hyphenated settings mappings."""

    def test_moead(self):
        cfg = MOEADConfig.from_settings({"h": 12, "t": 20, "nr": 2, "external-pop": "false"})
        assert (cfg.h, cfg.t, cfg.nr, cfg.external_pop) == (12, 20, 2, False)

    def test_paes(self):
        cfg = PAESConfig.from_settings({"number-of-bisections": 4, "archive-size": 50})
        assert (cfg.bisections, cfg.archive_size) == (4, 50)

    def test_underscores_accepted(self):
        cfg = GrEAConfig.from_settings({"div": 8, "grid_distance": "chebyshev"})
        assert cfg.grid_distance == "chebyshev"

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match="Unknown GrEA setting 'divisions'"):
            GrEAConfig.from_settings({"divisions": 8})

    def test_epsilon_values(self):
        cfg = OMOPSOConfig.from_settings({"epsilon-values": [0.1, 0.2]})
        assert cfg.epsilon == (0.1, 0.2)
        cfg = SSeMOEAConfig.from_settings({"epsilon-values": 0.05})
        assert cfg.epsilon == (0.05,)
        cfg = SMPSOConfig.from_settings({"number-of-hypercubes": 20, "mut-prob": 0.3})
        assert (cfg.n_hypercubes, cfg.mut_prob) == (20, 0.3)
        with pytest.raises(ConfigurationError):
            SMPSOConfig.from_settings({"epsilon-values": [0.1, -0.2]})

    def test_par_reference_point_mapping(self):
        cfg = PARConfig.from_settings({"reference-point": {"obj2": 0.5, "obj1": 0.25}, "rho": 1e-6})
        assert cfg.reference_point == (0.25, 0.5)
        with pytest.raises(MissingConfigError):
            PARConfig.from_settings({})

    def test_constraint_mode(self):
        assert NSGAIIConfig.from_settings({"constraint-mode": "Violation"}).constraint_mode == "violation"


class TestLoader:
    """YAML / JSON settings files."""

    def test_yaml(self, tmp_path):
        path = tmp_path / "moead.yaml"
        path.write_text("h: 12\nt: 20\nexternal-pop: true\n", encoding="utf-8")
        settings = load_strategy_settings(path)
        assert settings == {"h": 12, "t": 20, "external-pop": True}
        assert MOEADConfig.from_settings(settings).t == 20

    def test_json_section(self, tmp_path):
        path = tmp_path / "strategies.json"
        path.write_text(json.dumps({"grea": {"div": 6}, "ibea": {"k": 0.1}}), encoding="utf-8")
        assert load_strategy_settings(path, section="grea") == {"div": 6}
        with pytest.raises(ConfigurationError, match="no section 'hype'"):
            load_strategy_settings(path, section="hype")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_strategy_settings(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_strategy_settings(tmp_path / "absent.yaml")
