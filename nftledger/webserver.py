from sanic import Sanic
from sanic.response import json, text
import json as _json

from nftledger.client import RegistryClient
from nftledger.exceptions import NotFound, InvalidAccount, InvalidToken, InvalidFlag, AlreadyExists, Unauthorized, \
    AcknowledgmentFailed
from nftledger.logger import get_logger
from nftledger import config

log = get_logger('Webserver')

app = Sanic('nftledger')
client = RegistryClient()

ERROR_STATUS = {
    NotFound: 404,
    InvalidAccount: 400,
    InvalidToken: 400,
    InvalidFlag: 400,
    Unauthorized: 403,
    AlreadyExists: 409,
    AcknowledgmentFailed: 422,
}


# Token ids go past 64 bits, so stick to the stdlib encoder
def respond(body, status=200):
    return json(body, status=status, dumps=_json.dumps)


def error_response(e):
    return respond({'error': str(e), 'kind': type(e).__name__}, status=ERROR_STATUS.get(type(e), 400))


@app.route("/", methods=["GET",])
async def index(request):
    return text("I\'m a teapot", status=418)


@app.route('/balances/<account>', methods=['GET'])
async def get_balance(request, account):
    try:
        return respond({'account': account, 'balance': client.balance_of(account)})
    except InvalidAccount as e:
        return error_response(e)


@app.route('/tokens/<token_id:int>/owner', methods=['GET'])
async def get_owner(request, token_id):
    try:
        return respond({'token_id': token_id, 'owner': client.owner_of(token_id)})
    except (NotFound, InvalidToken) as e:
        return error_response(e)


@app.route('/tokens/<token_id:int>/approved', methods=['GET'])
async def get_approved(request, token_id):
    try:
        return respond({'token_id': token_id, 'approved': client.get_approved(token_id)})
    except (NotFound, InvalidToken) as e:
        return error_response(e)


@app.route('/operators/<owner>/<operator>', methods=['GET'])
async def get_operator(request, owner, operator):
    return respond({'owner': owner, 'operator': operator,
                    'approved': client.is_approved_for_all(owner, operator)})


@app.route('/interfaces/<interface_id>', methods=['GET'])
async def get_interface(request, interface_id):
    return respond({'interface_id': interface_id, 'supported': client.supports_interface(interface_id)})


@app.route('/events', methods=['GET'])
async def get_events(request):
    return respond({'events': [e.to_dict() for e in client.events]})


# Expects json object such that:
'''
{
    'sender': 'string',
    'function': 'string',
    'kwargs': {}
}
'''
@app.route('/execute', methods=['POST'])
async def execute(request):
    payload = request.json or {}

    sender = payload.get('sender')
    function_name = payload.get('function')
    kwargs = payload.get('kwargs', {})

    if function_name is None or not isinstance(kwargs, dict):
        return respond({'error': 'malformed payload'}, status=400)

    if isinstance(kwargs.get('data'), str):
        try:
            kwargs['data'] = bytes.fromhex(kwargs['data'])
        except ValueError:
            return respond({'error': 'data must be hex encoded'}, status=400)

    try:
        output = client.execute(function_name, kwargs, signer=sender)
    except AssertionError as e:
        return respond({'error': str(e)}, status=400)

    if output['status_code'] == 1:
        return error_response(output['result'])

    return respond({'success': True, 'result': output['result'], 'events': output['events']})


def start_webserver():
    log.info('Serving registry on {}:{}'.format(config.WEB_SERVER_HOST, config.WEB_SERVER_PORT))
    app.run(host=config.WEB_SERVER_HOST, port=config.WEB_SERVER_PORT, workers=config.NUM_WORKERS,
            debug=False, access_log=False)


if __name__ == '__main__':
    start_webserver()
