from shortlinks.dao.base.record_store_base_dao import RecordStoreBaseDAO


__all__ = [
    'RecordStoreBaseDAO',
]
