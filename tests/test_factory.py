"""Tests for the two-tier material factory."""

import threading

import pytest
from numpy.testing import assert_allclose

from xtal_scatter.core.errors import BadInput, InvalidInput, MissingInfo
from xtal_scatter.materials.factory import MaterialFactory
from xtal_scatter.physics.isotropic import IsotropicScatter
from xtal_scatter.physics.matcfg import MaterialConfig
from xtal_scatter.physics.scatter import ScatterKind


ALUMINA = "Al2O3_sg167_Corundum.ncmat"


class TestBaseMaterials:
    """Tests for composition-only base materials."""

    def test_base_shared_across_configurations(self, factory):
        m1 = factory.create_material(f"{ALUMINA};packfact=0.5")
        m2 = factory.create_material(f"{ALUMINA};temp=100K")

        assert m1 is not m2
        assert m1.base is m2.base
        assert m1.base.chemical_formula == "Al2O3"
        assert m1.base.name == "XtalBase::Al2O3"

    def test_base_properties(self, factory):
        base = factory.create_material(ALUMINA).base
        assert base.density == 1.0
        assert base.temperature == 293.15
        assert base.base is None
        assert {c.element.symbol: c.count for c in base.elements} == {"Al": 2, "O": 3}

    def test_reduced_formula_keys(self, factory):
        assert factory.create_material("Glucose_C6H12O6.ncmat").base.chemical_formula == "CH2O"
        assert factory.create_material("Fe2O3_Hematite.ncmat").base.chemical_formula == "Fe2O3"
        assert factory.create_material("Polyethylene_CH2.ncmat").base.chemical_formula == "CH2"

    def test_monoatomic_material(self, factory):
        assert factory.create_material("Al_sg225.ncmat").base.chemical_formula == "Al"

    def test_deuterium_formula(self, factory):
        base = factory.create_material("HeavyWater_D2O.ncmat").base
        assert base.chemical_formula == "D2O"
        assert {c.element.symbol for c in base.elements} == {"D", "O"}
        assert all(c.element.Z in (1, 8) for c in base.elements)

    def test_fractional_composition_key(self, factory):
        mat = factory.create_material("Concrete_amorphous.ncmat")
        assert mat.base.name == "XtalBase::_O_0.6_Si_0.25_Ca_0.1_H_0.05"
        assert mat.base.chemical_formula is None
        assert mat.chemical_formula is None
        assert all(c.count is None for c in mat.base.elements)
        assert_allclose(sum(c.mass_fraction for c in mat.base.elements), 1.0)

    def test_base_material_key(self, factory, library):
        info = library.create_info(MaterialConfig.from_string("Glucose_C6H12O6.ncmat"))
        assert factory.base_material_key(info) == "CH2O"

    def test_get_base_material_cached(self, factory, library):
        info = library.create_info(MaterialConfig.from_string(ALUMINA))
        first = factory.get_base_material(info)
        second = factory.get_base_material(info)
        assert first is second
        assert factory.table.lookup(first.index) is first.value


class TestDerivedMaterials:
    """Tests for fully configured derived materials."""

    def test_same_string_same_material(self, factory, table):
        m1 = factory.create_material(ALUMINA)
        n = len(table)
        m2 = factory.create_material(ALUMINA)

        assert m1 is m2
        assert len(table) == n

    def test_density_scaled_by_packfact(self, factory):
        mat = factory.create_material(f"{ALUMINA};packfact=0.5")
        assert_allclose(mat.density, 0.5 * 3.987)

    def test_temperature(self, factory):
        assert factory.create_material(ALUMINA).temperature == 293.15
        assert factory.create_material("HeavyWater_D2O.ncmat").temperature == 293.6
        assert factory.create_material(f"{ALUMINA};temp=20C").temperature == pytest.approx(293.15)
        assert factory.create_material(f"{ALUMINA};temp=77").temperature == 77.0

    def test_derived_properties(self, factory):
        mat = factory.create_material(f"{ALUMINA};packfact=0.6")
        assert mat.name == f"Xtal::{ALUMINA};packfact=0.6"
        assert mat.is_derived
        assert mat.chemical_formula == "Al2O3"
        assert mat.elements == mat.base.elements

    def test_scatter_attached(self, factory):
        scatter = factory.create_material(ALUMINA).scatter
        assert isinstance(scatter, IsotropicScatter)
        assert scatter.kind is ScatterKind.ISOTROPIC
        assert not scatter.is_oriented
        assert scatter.cross_section(0.025, [0.0, 0.0, 1.0]) == 15.7

    def test_textually_distinct_strings_not_merged(self, factory):
        m1 = factory.create_material("Al_sg225.ncmat;temp=293.15")
        m2 = factory.create_material("Al_sg225.ncmat;temp=293.15K")

        assert m1 is not m2
        assert m1.base is m2.base
        assert m1.temperature == m2.temperature

    def test_parsed_config_accepted(self, factory):
        text = f"{ALUMINA};packfact=0.5"
        assert factory.create_material(MaterialConfig.from_string(text)) is factory.create_material(text)

    def test_non_string_config_rejected(self, factory):
        with pytest.raises(BadInput):
            factory.create_material(42)


class TestStaleness:
    """Tests for rebuilding materials deleted from the host table."""

    def test_deleted_derived_material_rebuilt(self, factory, table):
        first = factory.create_material(ALUMINA)
        table.delete(first.index)

        second = factory.create_material(ALUMINA)

        assert second is not first
        assert table.lookup(second.index) is second
        assert second.base is first.base
        assert factory.derived_cache.stats().rebuilds == 1

    def test_deleted_base_material_rebuilt(self, factory, table):
        first = factory.create_material(f"{ALUMINA};packfact=0.5")
        table.delete(first.base.index)

        second = factory.create_material(f"{ALUMINA};packfact=0.6")

        assert second.base is not first.base
        assert second.base.chemical_formula == "Al2O3"
        assert factory.base_cache.stats().rebuilds == 1


class TestErrors:
    """Tests for error propagation."""

    def test_missing_density(self, factory, table):
        with pytest.raises(MissingInfo, match="density"):
            factory.create_material("Vanadium_gas.ncmat")
        assert len(table) == 0

    def test_missing_density_fake(self, fake_factory):
        with pytest.raises(MissingInfo):
            fake_factory.create_material("NoDensity.ncmat")

    def test_missing_composition(self, fake_factory):
        with pytest.raises(MissingInfo, match="composition"):
            fake_factory.create_material("NoComposition.ncmat")

    def test_duplicate_atoms(self, fake_factory):
        with pytest.raises(InvalidInput):
            fake_factory.create_material("Duplicate.ncmat")

    def test_bad_config(self, factory):
        with pytest.raises(BadInput):
            factory.create_material(f"{ALUMINA};bogus=1")

    def test_service_failure_not_cached(self, factory, table):
        for _ in range(2):
            with pytest.raises(BadInput, match="Unknown material data file"):
                factory.create_material("Unobtainium.ncmat")
        assert len(factory.derived_cache) == 0
        assert factory.derived_cache.stats().failures == 2
        assert len(table) == 0

    def test_unusable_scatter_model(self, fake_service, table):
        fake_service.scatters["NaCl.ncmat"] = object()
        factory = MaterialFactory(fake_service, table=table)

        with pytest.raises(BadInput, match="not a scattering model"):
            factory.create_material("NaCl.ncmat")
        assert len(table) == 0


class TestFakeService:
    """Tests against the in-memory service."""

    def test_fake_materials(self, fake_factory):
        salt = fake_factory.create_material("NaCl.ncmat;packfact=0.9")
        assert salt.base.chemical_formula == "ClNa"
        assert_allclose(salt.density, 0.9 * 2.165)

        water = fake_factory.create_material("Water.ncmat")
        assert water.chemical_formula == "H2O"
        assert water.temperature == 300.0

    def test_concurrent_requests_build_once(self, fake_factory, fake_service, table):
        n_threads = 8
        barrier = threading.Barrier(n_threads)
        results = [None] * n_threads

        def request(i):
            barrier.wait()
            results[i] = fake_factory.create_material("NaCl.ncmat;temp=20K")

        threads = [threading.Thread(target=request, args=(i,)) for i in range(n_threads)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(5)

        assert all(r is results[0] for r in results)
        assert fake_service.info_calls == 1
        assert fake_service.scatter_calls == 1
        # One base and one derived material
        assert len(table) == 2
