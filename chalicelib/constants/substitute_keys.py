# internal record key -> API key, None means the key is never sent to the UI
from_db = {
    'partkey': None,
    'sortkey': None,
    'record_order': None,
    'id_': 'id',
    'type_': 'type',
    'status_': 'status',
    'pending_amount': 'pendingAmount',
    'created_at': 'createdAt',
    'updated_at': 'updatedAt',
    'customer_id': 'customerId',
    'entity_id': 'entityId',
    'entity_type': 'entityType'
}

to_db = {
    'id': 'id_',
    'type': 'type_',
    'status': 'status_',
    'pendingAmount': 'pending_amount',
    'createdAt': 'created_at',
    'updatedAt': 'updated_at',
    'customerId': 'customer_id',
    'entityId': 'entity_id',
    'entityType': 'entity_type'
}
