"""
quote_position 스크립트 테스트
"""

import json

import pytest

from ..exceptions import ConfigError
from ..scripts.quote_position import load_position_config, main

WORKED_EXAMPLE = [
    "--price", "5000", "--lower", "4545", "--upper", "5500",
    "--amount0", "1", "--amount1", "5000",
    "--decimals0", "18", "--decimals1", "18",
]


class TestMain:
    """명령행 실행 테스트"""

    def test_prints_quote(self, capsys):
        assert main(WORKED_EXAMPLE) == 0

        out = capsys.readouterr().out
        assert "85176 / 84222 / 86129" in out
        assert "1517882343751509783892 (token1 binds)" in out
        assert "998976618347425273" in out
        assert "4999999999999999999999" in out

    def test_json(self, capsys):
        assert main(WORKED_EXAMPLE + ["--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["liquidity"] == 1517882343751509783892
        assert data["amount0"] == 998976618347425273
        assert data["liquidity1"] == 1517882343751509783892

    def test_out_of_range_reports_stage(self, capsys):
        args = ["--price", "4000", "--lower", "4545", "--upper", "5500",
                "--amount0", "1", "--amount1", "5000"]
        assert main(args) == 1
        out = capsys.readouterr().out
        assert "[range]" in out
        assert "must lie within" in out

    def test_degenerate_range(self, capsys):
        args = ["--price", "5000", "--lower", "5000", "--upper", "5000",
                "--amount0", "1", "--amount1", "5000"]
        assert main(args) == 1
        assert "lower bound price must be less than upper bound price" in capsys.readouterr().out

    def test_missing_inputs(self, capsys):
        assert main(["--price", "5000"]) == 1
        out = capsys.readouterr().out
        assert "[config]" in out
        assert "lower" in out

    def test_decimal_overflow_reports_stage(self, capsys):
        args = ["--price", "1e300", "--lower", "1e299", "--upper", "1e301",
                "--amount0", "1", "--amount1", "1", "--decimals0", "0", "--decimals1", "18"]
        assert main(args) == 1
        assert "[sqrt_price]" in capsys.readouterr().out

    def test_negative_decimals_reports_range(self, capsys):
        assert main(WORKED_EXAMPLE[:10] + ["--decimals0", "-1"]) == 1
        out = capsys.readouterr().out
        assert "[range]" in out
        assert "decimals0 must be non-negative" in out

    def test_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--price", "not-a-number"])
        assert exc_info.value.code == 2


class TestYamlConfig:
    """YAML 포지션 파일 테스트"""

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "position.yaml"
        path.write_text(
            "price: 5000\n"
            "lower: 4545\n"
            "upper: 5500\n"
            "amount0: 1\n"
            "amount1: 5000\n"
            "decimals0: 18\n"
            "decimals1: 18\n"
        )
        assert main(["--config", str(path), "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["liquidity"] == 1517882343751509783892

    def test_cli_overrides_file(self, tmp_path, capsys):
        path = tmp_path / "position.yaml"
        path.write_text("price: 4000\nlower: 4545\nupper: 5500\namount0: 1\namount1: 5000\n")
        assert main(["--config", str(path), "--price", "5000",
                     "--decimals0", "18", "--decimals1", "18", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["tick"] == 85176

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "position.yaml"
        path.write_text("price: 5000\nfee: 3000\n")
        with pytest.raises(ConfigError, match="unknown keys"):
            load_position_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "position.yaml"
        path.write_text("- 5000\n- 4545\n")
        with pytest.raises(ConfigError):
            load_position_config(path)

    def test_invalid_yaml(self, tmp_path, capsys):
        path = tmp_path / "position.yaml"
        path.write_text("price: [5000\n")
        assert main(["--config", str(path)]) == 1
        assert "invalid YAML" in capsys.readouterr().out

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read"):
            load_position_config(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "position.yaml"
        path.write_text("")
        assert load_position_config(path) == {}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
