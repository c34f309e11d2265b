import pytest

from inventory.models import ItemCategory, Location


@pytest.fixture
def manager(auth_client):
    return auth_client('inventory_manager')


@pytest.fixture
def nurse(auth_client):
    return auth_client('nurse')


@pytest.fixture
def consumables(db):
    return ItemCategory.objects.create(category_code='CONS', category_name='Consumables')


@pytest.fixture
def gloves_sub(consumables):
    return ItemCategory.objects.create(category_code='CONS-GLV', category_name='Gloves', parent=consumables)


@pytest.fixture
def linen(db):
    return ItemCategory.objects.create(category_code='LIN', category_name='Linen')


@pytest.fixture
def main_store(db):
    return Location.objects.create(location_code='MS', location_name='Main Store')
