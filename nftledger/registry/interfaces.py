from nftledger import config

SUPPORTED_INTERFACES = {
    config.ERC165_INTERFACE_ID: True,
    config.ERC721_INTERFACE_ID: True,
}


def supports_interface(interface_id) -> bool:
    if isinstance(interface_id, str):
        try:
            interface_id = bytes.fromhex(interface_id[2:] if interface_id.startswith('0x') else interface_id)
        except ValueError:
            return False

    # 0xffffffff must never be reported as supported
    if interface_id == config.INVALID_INTERFACE_ID:
        return False

    return SUPPORTED_INTERFACES.get(interface_id, False)
