"""Tests for the command-line interface."""

import pytest

from xtal_scatter.cli import main


class TestCli:
    """Tests for the CLI commands."""

    def test_formula(self, capsys):
        assert main(["formula", "6:6", "1:12", "8:6"]) == 0
        assert capsys.readouterr().out.strip() == "CH2O"

    def test_formula_deuterium(self, capsys):
        assert main(["formula", "1001:2", "8:1"]) == 0
        assert capsys.readouterr().out.strip() == "D2O"

    def test_formula_invalid_composition(self):
        assert main(["formula", "8:1", "8:2"]) == 2

    def test_formula_bad_token(self):
        with pytest.raises(SystemExit):
            main(["formula", "8-1"])

    def test_material(self, capsys):
        assert main(["material", "Al2O3_sg167_Corundum.ncmat;packfact=0.5"]) == 0
        out = capsys.readouterr().out
        assert "XtalBase::Al2O3" in out
        assert "isotropic" in out
        assert "15.7 barn" in out

    def test_material_custom_library(self, tmp_path, capsys):
        path = tmp_path / "lib.yaml"
        path.write_text(
            "materials:\n"
            "  - name: Si.ncmat\n"
            "    density: 2.33\n"
            "    atoms: [{Z: 14, count: 8}]\n"
            "    scatter: {model: constant, sigma: 2.2}\n",
            encoding="utf-8",
        )
        assert main(["material", "Si.ncmat;temp=20C", "--library", str(path)]) == 0
        assert "XtalBase::Si" in capsys.readouterr().out

    def test_material_errors(self, tmp_path):
        assert main(["material", "Unobtainium.ncmat"]) == 2
        assert main(["material", "Vanadium_gas.ncmat"]) == 2
        assert main(["material", "x.ncmat", "--library", str(tmp_path / "nope.yaml")]) == 2

    def test_error_reported_in_log(self, caplog):
        assert main(["material", "Unobtainium.ncmat"]) == 2
        assert "BadInput: Unknown material data file 'Unobtainium.ncmat'" in caplog.text

    def test_plot(self, tmp_path):
        path = tmp_path / "al.png"
        assert main(["plot", "Al_sg225.ncmat", "--output", str(path), "--samples", "500"]) == 0
        assert path.exists()

    def test_no_command(self):
        assert main([]) == 1
