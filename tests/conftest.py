import pytest
import hydra

from operations.transit_system import TransitSystem


def get_cfg(config_name='test_network.yaml'):
    try:
        hydra.initialize(config_path="../cfg", version_base=None)
    except ValueError:
        # hydra is already initialized
        pass
    return hydra.compose(config_name=config_name)


@pytest.fixture
def test_cfg():
    return get_cfg()


@pytest.fixture
def system(test_cfg):
    return TransitSystem.from_cfg(test_cfg)
