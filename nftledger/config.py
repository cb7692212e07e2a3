import os

NAMESPACE = 'nft'

DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

# Token identifiers are unsigned 256 bit integers. Zero is reserved.
NULL_TOKEN = 0
MAX_TOKEN_ID = 2 ** 256 - 1

OWNERS_HASH = 'owners'
BALANCES_HASH = 'balances'
APPROVALS_HASH = 'approvals'
OPERATORS_HASH = 'operators'

# Magic value a programmable receiver returns to accept a token.
# Equal to bytes4(keccak256("onERC721Received(address,uint256,bytes)"))
ERC721_RECEIVED = b'\xf0\xb9\xe5\xba'

ERC165_INTERFACE_ID = b'\x01\xff\xc9\xa7'
ERC721_INTERFACE_ID = b'\x80\xac\x58\xcd'
INVALID_INTERFACE_ID = b'\xff\xff\xff\xff'

PRIVATE_METHOD_PREFIX = '_'

WEB_SERVER_HOST = os.getenv('NFTLEDGER_HOST', '0.0.0.0')
WEB_SERVER_PORT = int(os.getenv('NFTLEDGER_PORT', 8080))
NUM_WORKERS = 1

MONGO_URL = os.getenv('NFTLEDGER_MONGO_URL', 'mongodb://localhost:27017')
MONGO_DB = 'nftledger'
MONGO_COLLECTION = 'state'
