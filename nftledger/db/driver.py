from nftledger.db.encoder import encode, decode
from nftledger.logger import get_logger
from nftledger import config
import pymongo
import re
import threading

log = get_logger('Driver')

# DB maps strings to encoded strings
# Driver maps string to python object


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        res = self.db.get(item.encode())
        if res is None:
            return None
        return decode(res)

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
        else:
            self.db[key.encode()] = encode(value).encode()

    def delete(self, key: str):
        self.db.pop(key.encode(), None)

    def apply(self, writes: dict):
        # Build the next state aside and swap it in so readers never see half a commit
        db = dict(self.db)
        for k, v in writes.items():
            if v is None:
                db.pop(k.encode(), None)
            else:
                db[k.encode()] = encode(v).encode()
        self.db = db

    def iter(self, prefix: str):
        p = prefix.encode()
        return [k.decode() for k in sorted(self.db.keys()) if k.startswith(p)]

    def flush(self):
        self.db = {}


class MongoDriver:
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    def __init__(self, conn_str=config.MONGO_URL, db=config.MONGO_DB, collection=config.MONGO_COLLECTION,
                 client=None):
        self.client = client if client is not None else pymongo.MongoClient(conn_str)
        self.db = self.client[db][collection]

    def get(self, item: str):
        v = self.db.find_one({'rawKey': item})
        if v is None:
            return None
        return decode(v['value'])

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
        else:
            self.db.update_one({'rawKey': key}, {'$set': {'value': encode(value)}}, upsert=True)

    def delete(self, key: str):
        self.db.delete_one({'rawKey': key})

    def apply(self, writes: dict):
        ops = []
        for k, v in writes.items():
            if v is None:
                ops.append(pymongo.DeleteOne({'rawKey': k}))
            else:
                ops.append(pymongo.UpdateOne({'rawKey': k}, {'$set': {'value': encode(v)}}, upsert=True))

        if ops:
            self.db.bulk_write(ops, ordered=True)

    def iter(self, prefix: str):
        cur = self.db.find({'rawKey': {'$regex': '^{}'.format(re.escape(prefix))}})
        return sorted(entry['rawKey'] for entry in cur)

    def flush(self):
        self.db.delete_many({})


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # L1 cache
        self.driver = driver if driver is not None else InMemDriver()  # L0
        self.writer = None

    def begin(self):
        # Pending writes stay private to the writing thread until commit
        self.writer = threading.get_ident()

    def _sees_pending(self):
        return self.writer is None or self.writer == threading.get_ident()

    def find(self, key: str):
        # A pending None is a pending delete and shadows the backing store
        if self._sees_pending() and key in self.pending_writes:
            return self.pending_writes[key]

        return self.driver.get(key)

    def get(self, key: str):
        return self.find(key)

    def set(self, key, value):
        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def checkpoint(self):
        return dict(self.pending_writes)

    def rollback_to(self, checkpoint: dict):
        self.pending_writes.clear()
        self.pending_writes.update(checkpoint)

    def commit(self):
        log.debug('Committing {} pending writes'.format(len(self.pending_writes)))

        try:
            self.driver.apply(self.pending_writes)
        finally:
            # A failed apply leaves nothing behind for the next caller to commit
            self.pending_writes.clear()
            self.writer = None

    def rollback(self):
        # Returns to the state of the backing driver
        log.debug('Discarding {} pending writes'.format(len(self.pending_writes)))
        self.pending_writes.clear()
        self.writer = None

    def clear_pending_state(self):
        self.rollback()


class LedgerDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR

    def items(self, prefix=''):
        # Pending writes win over whatever the backing store holds
        _items = {}
        shadowed = set()

        if self._sees_pending():
            for k, v in self.pending_writes.items():
                if k.startswith(prefix):
                    shadowed.add(k)
                    if v is not None:
                        _items[k] = v

        for k in self.driver.iter(prefix=prefix):
            if k not in shadowed:
                value = self.driver.get(k)
                if value is not None:
                    _items[k] = value

        return dict(sorted(_items.items()))

    def make_key(self, namespace, variable, args=None):
        namespace_variable = self.delimiter.join((namespace, variable))
        if args:
            return config.DELIMITER.join((namespace_variable, *[str(arg) for arg in args]))
        return namespace_variable

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
