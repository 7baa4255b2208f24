"""Pytest configuration and shared fixtures for xtal_scatter tests."""

import pytest
import numpy as np

from xtal_scatter.materials.factory import MaterialFactory
from xtal_scatter.materials.registry import MaterialTable
from xtal_scatter.physics.info import AtomEntry, PhysicsInfo
from xtal_scatter.physics.library import DataLibrary
from xtal_scatter.physics.models import ConstantIsotropicModel


class FakeService:
    """Model construction service backed by in-memory PhysicsInfo objects.

    Counts calls so tests can check how often models were constructed.
    """

    def __init__(self, infos=None, scatters=None):
        self.infos = dict(infos or {})
        self.scatters = dict(scatters or {})
        self.info_calls = 0
        self.scatter_calls = 0

    def create_info(self, cfg):
        self.info_calls += 1
        return self.infos[cfg.datafile]

    def create_scatter(self, cfg):
        self.scatter_calls += 1
        return self.scatters.get(cfg.datafile, ConstantIsotropicModel(1.0))


# Fixtures for physics data


@pytest.fixture
def library():
    """Library with the bundled material data."""
    return DataLibrary.default()


@pytest.fixture
def fake_service():
    """Service describing a few hand-made materials."""
    return FakeService(infos={
        "NaCl.ncmat": PhysicsInfo(
            atom_info=(AtomEntry(11, 4), AtomEntry(17, 4)),
            density=2.165,
        ),
        "Water.ncmat": PhysicsInfo(
            atom_info=(AtomEntry(1, 2), AtomEntry(8, 1)),
            density=1.0,
            temperature=300.0,
        ),
        "NoComposition.ncmat": PhysicsInfo(density=1.0),
        "NoDensity.ncmat": PhysicsInfo(atom_info=(AtomEntry(26, 1),)),
        "Duplicate.ncmat": PhysicsInfo(
            atom_info=(AtomEntry(8, 1), AtomEntry(8, 2)),
            density=1.0,
        ),
    })


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(12345)


# Fixtures for the material system


@pytest.fixture
def table():
    """Empty host material table."""
    return MaterialTable()


@pytest.fixture
def factory(library, table, rng):
    """Factory over the bundled library."""
    return MaterialFactory(library, table=table, rng=rng)


@pytest.fixture
def fake_factory(fake_service, table, rng):
    """Factory over the in-memory fake service."""
    return MaterialFactory(fake_service, table=table, rng=rng)
