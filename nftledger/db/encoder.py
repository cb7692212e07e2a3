import json

MONGO_MIN_INT = -(2 ** 63)
MONGO_MAX_INT = 2 ** 63 - 1

##
# ENCODER CLASS
# Add to this to encode Python types for storage.
# Token identifiers are 256 bit and do not fit in a Mongo integer, so anything past 8 bytes is stored as a string.
##


class Encoder(json.JSONEncoder):
    def default(self, o, *args):
        if isinstance(o, bytes):
            return {
                '__bytes__': o.hex()
            }
        return super().default(o)


def encode_int(value: int):
    if MONGO_MIN_INT < value < MONGO_MAX_INT:
        return value

    return {
        '__big_int__': str(value)
    }


def encode_ints_in_dict(data: dict):
    d = dict()
    for k, v in data.items():
        if isinstance(v, bool):
            d[k] = v
        elif isinstance(v, int):
            d[k] = encode_int(v)
        elif isinstance(v, dict):
            d[k] = encode_ints_in_dict(v)
        elif isinstance(v, list):
            d[k] = []
            for i in v:
                if isinstance(i, dict):
                    d[k].append(encode_ints_in_dict(i))
                elif isinstance(i, int) and not isinstance(i, bool):
                    d[k].append(encode_int(i))
                else:
                    d[k].append(i)
        else:
            d[k] = v

    return d


def encode(data):
    """ NOTE:
    Normally encoding behavior is overriden in 'default' method inside
    a class derived from json.JSONEncoder. Unfortunately this can be done only
    for custom types, and int is not one of them.
    """
    if isinstance(data, int) and not isinstance(data, bool):
        data = encode_int(data)
    elif isinstance(data, dict):
        data = encode_ints_in_dict(data)

    return json.dumps(data, cls=Encoder, separators=(',', ':'))


def as_object(d):
    if '__bytes__' in d:
        return bytes.fromhex(d['__bytes__'])
    elif '__big_int__' in d:
        return int(d['__big_int__'])
    return dict(d)


# Decode has a hook for JSON objects, which are just Python dictionaries. You have to specify the logic in this hook.
def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data, object_hook=as_object)
    except json.decoder.JSONDecodeError:
        return None
