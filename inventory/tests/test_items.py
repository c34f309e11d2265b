import pytest
from django.urls import reverse

from core.models import AuditEvent
from inventory.models import Item

pytestmark = pytest.mark.django_db

ITEMS = '/api/v1/inventory/items'


def create_item(client, category, **overrides):
    payload = {'itemCode': 'gl-001', 'itemName': 'Nitrile Gloves', 'category': category.id, 'uom': 'Box'}
    payload.update(overrides)
    return client.post(ITEMS, payload, format='json')


def detail_url(pk, suffix=''):
    return reverse(f'inventory_item_{suffix or "detail"}', args=[pk])


def test_create_item(manager, consumables, gloves_sub, main_store):
    r = create_item(manager, consumables, subCategory=gloves_sub.id, defaultLocation=main_store.id,
                    specifications={'size': 'M'}, description='<b>powder free</b>')
    assert r.status_code == 201, r.data
    data = r.data['data']
    assert data['itemCode'] == 'GL-001'
    assert data['_id'] == data['id']
    assert data['category']['categoryName'] == 'Consumables'
    assert data['subCategory']['_id'] == gloves_sub.id
    assert data['defaultLocation']['locationCode'] == 'MS'
    assert data['description'] == 'powder free'
    assert data['reorderLevel'] == 10 and data['maxStockLevel'] == 100
    assert data['isActive'] is True and data['status'] == 'active'

    item = Item.objects.get(item_code='GL-001')
    assert item.created_by == manager.user
    assert AuditEvent.objects.filter(action='item_create', object_id=str(item.pk)).exists()


def test_item_code_unique_case_insensitive(manager, consumables):
    assert create_item(manager, consumables).status_code == 201
    r = create_item(manager, consumables, itemCode='GL-001 ')
    assert r.status_code == 400
    assert 'itemCode' in r.data['error']['message']


def test_required_fields(manager):
    r = manager.post(ITEMS, {'itemName': 'Gauze'}, format='json')
    assert r.status_code == 400
    assert {'itemCode', 'category'} <= set(r.data['error']['message'])


def test_max_stock_must_cover_reorder_level(manager, consumables):
    r = create_item(manager, consumables, reorderLevel=50, maxStockLevel=20)
    assert r.status_code == 400
    assert 'maxStockLevel' in r.data['error']['message']


def test_sub_category_must_belong_to_category(manager, linen, gloves_sub):
    r = create_item(manager, linen, subCategory=gloves_sub.id)
    assert r.status_code == 400
    assert 'subCategory' in r.data['error']['message']


def test_unknown_uom_rejected(manager, consumables):
    assert create_item(manager, consumables, uom='Barrel').status_code == 400


def test_read_only_roles_cannot_write(nurse, consumables):
    assert create_item(nurse, consumables).status_code == 403
    assert nurse.get(ITEMS).status_code == 200


def test_anonymous_is_rejected(client):
    assert client.get(ITEMS).status_code == 401


def test_list_search_filter_and_paging(manager, consumables, gloves_sub, linen):
    for i in range(25):
        create_item(manager, consumables, itemCode=f'C-{i:03d}', itemName=f'Syringe {i}')
    create_item(manager, consumables, itemCode='GLV-1', itemName='Latex Gloves', subCategory=gloves_sub.id)
    create_item(manager, linen, itemCode='LIN-1', itemName='Bed Sheet')

    r = manager.get(ITEMS)
    assert r.data['pagination'] == {'total': 27, 'page': 1, 'limit': 20, 'pages': 2}
    assert r.data['data'][0]['itemCode'] == 'C-000'

    r = manager.get(ITEMS, {'page': 2, 'limit': 20})
    assert len(r.data['data']) == 7

    r = manager.get(ITEMS, {'search': 'gloves'})
    assert [d['itemCode'] for d in r.data['data']] == ['GLV-1']

    r = manager.get(ITEMS, {'category': gloves_sub.id})
    assert [d['itemCode'] for d in r.data['data']] == ['GLV-1']

    r = manager.get(ITEMS, {'category': linen.id})
    assert r.data['pagination']['total'] == 1


def test_list_rejects_bad_limit(manager):
    assert manager.get(ITEMS, {'limit': 500}).status_code == 400
    assert manager.get(ITEMS, {'page': 0}).status_code == 400


def test_update_keeps_item_code(manager, consumables, linen):
    pk = create_item(manager, consumables).data['data']['id']

    r = manager.put(detail_url(pk), {'itemCode': 'GL-001', 'itemName': 'Nitrile Gloves L',
                                     'category': linen.id}, format='json')
    assert r.status_code == 200
    assert r.data['data']['category']['categoryCode'] == 'LIN'

    r = manager.patch(detail_url(pk), {'itemCode': 'GL-999'}, format='json')
    assert r.status_code == 400

    r = manager.patch(detail_url(pk), {'reorderLevel': 5}, format='json')
    assert r.status_code == 200
    assert r.data['data']['reorderLevel'] == 5
    assert AuditEvent.objects.filter(action='item_update', object_id=str(pk)).count() == 2


def test_unknown_item_is_404(manager):
    r = manager.get(detail_url(424242))
    assert r.status_code == 404
    assert r.data['success'] is False


def test_deactivate_requires_reason_and_keeps_row(manager, consumables):
    pk = create_item(manager, consumables).data['data']['id']
    url = detail_url(pk, 'deactivate')

    assert manager.post(url, {}, format='json').status_code == 400
    assert manager.post(url, {'reason': '   '}, format='json').status_code == 400

    r = manager.post(url, {'reason': 'Discontinued by supplier'}, format='json')
    assert r.status_code == 200
    data = r.data['data']
    assert data['isActive'] is False
    assert data['status'] == 'inactive'
    assert data['deactivationReason'] == 'Discontinued by supplier'
    assert data['deactivatedAt']

    item = Item.objects.get(pk=pk)
    assert item.deactivated_by == manager.user

    again = manager.post(url, {'reason': 'again'}, format='json')
    assert again.status_code == 400

    assert manager.get(ITEMS, {'isActive': 'false'}).data['pagination']['total'] == 1
    assert manager.get(ITEMS, {'isActive': 'true'}).data['pagination']['total'] == 0


def test_item_audit_trail_newest_first(manager, consumables):
    pk = create_item(manager, consumables).data['data']['id']
    manager.patch(detail_url(pk), {'itemName': 'Gloves'}, format='json')
    manager.post(detail_url(pk, 'deactivate'), {'reason': 'Replaced'}, format='json')

    r = manager.get(detail_url(pk, 'audit'))
    assert r.status_code == 200
    assert [e['action'] for e in r.data['data']] == ['item_deactivate', 'item_update', 'item_create']
    assert r.data['data'][0]['detail'] == {'reason': 'Replaced'}
    assert r.data['data'][0]['user'] == manager.user.email


def test_categories_and_locations_lookups(manager, nurse, consumables, gloves_sub):
    r = nurse.get(reverse('inventory_categories'), {'topLevel': 'true'})
    assert [c['categoryCode'] for c in r.data['data']] == ['CONS']

    r = manager.post(reverse('inventory_locations'), {'locationCode': 'ward-3', 'locationName': 'Ward 3',
                                                      'locationType': 'ward'}, format='json')
    assert r.status_code == 201
    assert r.data['data']['locationCode'] == 'WARD-3'
    assert nurse.post(reverse('inventory_categories'), {'categoryCode': 'X', 'categoryName': 'X'},
                      format='json').status_code == 403
