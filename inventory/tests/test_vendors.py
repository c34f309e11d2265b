import pytest

from inventory.models import Vendor

pytestmark = pytest.mark.django_db

VENDORS = '/api/v1/inventory/vendors'


def vendor_payload(**overrides):
    payload = {
        'vendorCode': 'v-medline',
        'vendorName': 'Medline Supplies',
        'contactPerson': 'Anita Rao',
        'email': 'orders@medline.example',
        'phone': '+91 98450 00000',
        'address': 'Plot 12, Industrial Area<script>x</script>',
        'gstNumber': '29abcde1234f1z5',
        'panNumber': 'ABCDE1234F',
        'bankDetails': {'bankName': 'State Bank', 'accountNumber': '1234 5678 9012', 'ifscCode': 'sbin0001234'},
        'paymentTerms': 45,
    }
    payload.update(overrides)
    return payload


def test_create_vendor_with_bank_details(manager):
    r = manager.post(VENDORS, vendor_payload(), format='json')
    assert r.status_code == 201, r.data
    data = r.data['data']
    assert data['vendorCode'] == 'V-MEDLINE'
    assert data['gstNumber'] == '29ABCDE1234F1Z5'
    assert data['bankDetails'] == {'bankName': 'State Bank', 'accountNumber': '123456789012', 'ifscCode': 'SBIN0001234'}
    assert data['paymentTerms'] == 45
    assert '<script>' not in data['address']

    v = Vendor.objects.get(vendor_code='V-MEDLINE')
    assert v.ifsc_code == 'SBIN0001234'
    assert v.bank_account_number == '123456789012'


@pytest.mark.parametrize('field,value', [
    ('gstNumber', '12345'),
    ('panNumber', 'ABCD1234F'),
    ('email', 'not-an-email'),
    ('paymentTerms', -1),
])
def test_invalid_vendor_fields(manager, field, value):
    r = manager.post(VENDORS, vendor_payload(**{field: value}), format='json')
    assert r.status_code == 400
    assert field in r.data['error']['message']


def test_invalid_bank_details(manager):
    r = manager.post(VENDORS, vendor_payload(bankDetails={'accountNumber': '12AB', 'ifscCode': 'BAD'}), format='json')
    assert r.status_code == 400
    assert set(r.data['error']['message']['bankDetails']) == {'accountNumber', 'ifscCode'}


def test_vendor_code_unique_and_immutable(manager):
    pk = manager.post(VENDORS, vendor_payload(), format='json').data['data']['id']
    assert manager.post(VENDORS, vendor_payload(vendorCode='V-MEDLINE'), format='json').status_code == 400

    r = manager.patch(f'{VENDORS}/{pk}', {'vendorCode': 'V-OTHER'}, format='json')
    assert r.status_code == 400

    r = manager.patch(f'{VENDORS}/{pk}', {'paymentTerms': 15, 'bankDetails': {'bankName': 'HDFC'}}, format='json')
    assert r.status_code == 200
    assert r.data['data']['paymentTerms'] == 15
    assert r.data['data']['bankDetails']['bankName'] == 'HDFC'
    # untouched bank fields survive a partial update
    assert r.data['data']['bankDetails']['ifscCode'] == 'SBIN0001234'


def test_vendor_search_and_active_filter(manager):
    manager.post(VENDORS, vendor_payload(), format='json')
    pk = manager.post(VENDORS, vendor_payload(vendorCode='V-LINEN', vendorName='City Linen Co',
                                              contactPerson='Joseph', email='sales@citylinen.example'),
                      format='json').data['data']['id']

    assert [v['vendorCode'] for v in manager.get(VENDORS, {'search': 'anita'}).data['data']] == ['V-MEDLINE']
    assert [v['vendorCode'] for v in manager.get(VENDORS, {'search': 'citylinen'}).data['data']] == ['V-LINEN']

    r = manager.post(f'{VENDORS}/{pk}/deactivate', {'reason': 'Contract ended'}, format='json')
    assert r.status_code == 200
    assert r.data['data']['status'] == 'inactive'

    assert [v['vendorCode'] for v in manager.get(VENDORS, {'isActive': 'true'}).data['data']] == ['V-MEDLINE']
    assert manager.get(VENDORS).data['pagination']['total'] == 2


def test_nurse_cannot_deactivate_vendor(manager, nurse):
    pk = manager.post(VENDORS, vendor_payload(), format='json').data['data']['id']
    assert nurse.get(f'{VENDORS}/{pk}').status_code == 200
    assert nurse.post(f'{VENDORS}/{pk}/deactivate', {'reason': 'x'}, format='json').status_code == 403
    assert Vendor.objects.get(pk=pk).is_active is True
