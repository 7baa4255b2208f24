"""Tests for the YAML-backed data library and reference models."""

import textwrap

import pytest
import numpy as np
from numpy.testing import assert_allclose

from xtal_scatter.core.errors import BadInput
from xtal_scatter.physics.info import AtomEntry, PhysicsInfo
from xtal_scatter.physics.library import DataLibrary, MaterialData, build_scatter_model
from xtal_scatter.physics.matcfg import MaterialConfig
from xtal_scatter.physics.models import ConstantIsotropicModel, TabulatedIsotropicModel


def write_library(tmp_path, text):
    path = tmp_path / "materials.yaml"
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return str(path)


class TestDataLibrary:
    """Tests for DataLibrary."""

    def test_bundled_entries(self, library):
        names = library.list_entries()
        assert "Al2O3_sg167_Corundum.ncmat" in names
        assert "HeavyWater_D2O.ncmat" in names

    def test_create_info(self, library):
        info = library.create_info(MaterialConfig.from_string("Al2O3_sg167_Corundum.ncmat"))
        assert info.has_atom_info()
        assert info.has_density()
        assert not info.has_temperature()
        assert_allclose(info.density, 3.987)

    def test_configured_temperature_overrides_data(self, library):
        info = library.create_info(MaterialConfig.from_string("HeavyWater_D2O.ncmat;temp=350"))
        assert info.temperature == 350.0

        info = library.create_info(MaterialConfig.from_string("HeavyWater_D2O.ncmat"))
        assert info.temperature == 293.6

    def test_composition_derived_from_atoms(self, library):
        info = library.create_info(MaterialConfig.from_string("HeavyWater_D2O.ncmat"))
        fractions = dict(info.composition)
        assert_allclose(fractions["D"], 2.0 / 3.0)
        assert_allclose(fractions["O"], 1.0 / 3.0)

    def test_create_scatter(self, library):
        model = library.create_scatter(MaterialConfig.from_string("Al2O3_sg167_Corundum.ncmat"))
        assert isinstance(model, ConstantIsotropicModel)
        assert model.cross_section_non_oriented(0.025) == 15.7

    def test_unknown_datafile(self, library):
        cfg = MaterialConfig.from_string("Unobtainium.ncmat")
        with pytest.raises(BadInput, match="Unknown material data file"):
            library.create_info(cfg)
        with pytest.raises(BadInput):
            library.create_scatter(cfg)

    def test_duplicate_registration(self):
        library = DataLibrary()
        library.register(MaterialData(name="X.ncmat", density=1.0))
        with pytest.raises(BadInput, match="already registered"):
            library.register(MaterialData(name="X.ncmat", density=2.0))

    def test_load_from_yaml(self, tmp_path):
        path = write_library(tmp_path, """
            materials:
              - name: Foo.ncmat
                density: 2.0
                atoms:
                  - {Z: 14, count: 8}
                scatter:
                  model: constant
                  sigma: 2.2
        """)
        library = DataLibrary(path)
        assert library.list_entries() == ["Foo.ncmat"]
        assert library.get_entry("Foo.ncmat").atom_info == (AtomEntry(14, 8),)

    def test_malformed_entries_skipped_with_warning(self, tmp_path):
        path = write_library(tmp_path, """
            materials:
              - name: Good.ncmat
                density: 1.0
              - name: BadZ.ncmat
                atoms:
                  - {Z: 200, count: 1}
              - name: HalfAtom.ncmat
                atoms:
                  - {Z: 8, count: 2.5}
              - density: 3.0
        """)
        with pytest.warns(UserWarning, match="Failed to load material data"):
            library = DataLibrary(path)
        assert library.list_entries() == ["Good.ncmat"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DataLibrary(str(tmp_path / "nope.yaml"))

    def test_missing_materials_list(self, tmp_path):
        path = write_library(tmp_path, "something: else\n")
        with pytest.raises(BadInput, match="materials"):
            DataLibrary(path)


class TestScatterModels:
    """Tests for build_scatter_model and the reference models."""

    def test_missing_model(self):
        with pytest.raises(BadInput, match="lacks a scattering model"):
            build_scatter_model({})

    def test_unknown_model(self):
        with pytest.raises(BadInput, match="Unknown scatter model"):
            build_scatter_model({"model": "bragg"})

    def test_invalid_parameters(self):
        with pytest.raises(BadInput, match="Invalid parameters"):
            build_scatter_model({"model": "constant"})
        with pytest.raises(BadInput):
            build_scatter_model({"model": "constant", "sigma": -1.0})

    def test_tabulated_interpolation(self):
        model = build_scatter_model({
            "model": "tabulated", "energies": [1.0, 0.0], "sigma": [3.0, 1.0],
        })
        assert isinstance(model, TabulatedIsotropicModel)
        assert_allclose(model.cross_section_non_oriented(0.5), 2.0)

    def test_tabulated_clamps_with_warning(self):
        model = TabulatedIsotropicModel([1.0, 2.0], [3.0, 5.0])
        with pytest.warns(UserWarning, match="outside tabulated range"):
            assert model.cross_section_non_oriented(10.0) == 5.0

    def test_tabulated_shape_mismatch(self):
        with pytest.raises(BadInput):
            TabulatedIsotropicModel([1.0, 2.0, 3.0], [1.0, 2.0])

    def test_tabulated_grid_read_only(self):
        model = TabulatedIsotropicModel([1.0, 2.0], [3.0, 5.0])
        with pytest.raises(ValueError):
            model.sigma[0] = 0.0

    def test_isotropic_sampling_is_elastic(self, rng):
        model = ConstantIsotropicModel(1.0)
        samples = [model.sample_non_oriented(0.025, rng) for _ in range(1000)]
        angles = np.array([s[0] for s in samples])

        assert all(s[1] == 0.0 for s in samples)
        assert np.all((angles >= 0.0) & (angles <= np.pi))
        assert_allclose(np.mean(np.cos(angles)), 0.0, atol=0.1)


class TestMaterialData:
    """Tests for MaterialData entries."""

    def test_invalid_atomic_number(self):
        with pytest.raises(BadInput):
            MaterialData(name="X.ncmat", atom_info=(AtomEntry(0, 1),))

    @pytest.mark.parametrize("atom", [
        {"Z": 8, "count": 2.5},
        {"Z": 8.5, "count": 1},
        {"Z": 8, "count": True},
    ])
    def test_non_integer_atoms_rejected(self, atom):
        with pytest.raises(BadInput, match="must be an integer"):
            MaterialData.from_dict({"name": "X.ncmat", "atoms": [atom]})

    def test_whole_float_count_accepted(self):
        entry = MaterialData.from_dict({"name": "X.ncmat", "atoms": [{"Z": 8, "count": 2.0}]})
        assert entry.atom_info == (AtomEntry(8, 2),)

    def test_explicit_composition_preferred(self):
        entry = MaterialData.from_dict({
            "name": "X.ncmat",
            "atoms": [{"Z": 13, "count": 1}],
            "composition": [{"element": "O", "fraction": 1.0}],
        })
        assert entry.fractional_composition() == (("O", 1.0),)

    def test_physics_info_validation(self):
        with pytest.raises(BadInput):
            PhysicsInfo(density=-1.0)
        with pytest.raises(BadInput):
            PhysicsInfo(composition=(("O", 1.5),))
