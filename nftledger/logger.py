"""Module for initializing settings related to the built-in registry logger
Functions:
-get_logger
-overwrite_logger_level"""

import logging, coloredlogs
import os

VALID_LVLS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
_LOG_LVL = os.getenv('LOG_LEVEL', None)
if _LOG_LVL:
    assert _LOG_LVL in VALID_LVLS, "Log level {} not in valid levels {}".format(_LOG_LVL, VALID_LVLS)
    _LOG_LVL = getattr(logging, _LOG_LVL)
else:
    _LOG_LVL = logging.WARNING

format = '%(asctime)s.%(msecs)03d %(name)s[%(process)d] <{}> %(levelname)-2s %(message)s'.format(
    os.getenv('HOST_NAME', 'Registry')
)

"""
Custom Log Levels
"""
#   Default levels
# 'CRITICAL': 50,
# 'ERROR': 40,
# 'WARNING': 30,
# 'INFO': 20,
# 'DEBUG' : 10

CUSTOM_LEVELS = {
    'NOTICE': 22,
    'FATAL': 99
}

for log_name, log_level in CUSTOM_LEVELS.items():
    logging.addLevelName(log_level, log_name)


def apply_custom_level(log, name: str, level: int):
    def _lvl_func(message, *args, **kws):
        if level >= log.getEffectiveLevel():
            log._log(level, message, args, **kws)

    setattr(log, name.lower(), _lvl_func)


"""
Custom Styling
"""

coloredlogs.DEFAULT_LEVEL_STYLES = {
    'fatal': {'color': 'white', 'bold': True, 'background': 'red', 'underline': True},
    'critical': {'color': 'white', 'bold': True, 'background': 'red'},
    'error': {'color': 'red'},
    'warning': {'color': 'yellow'},
    'notice': {'color': 'magenta'},
    'info': {'color': 'white'},
    'debug': {'color': 'green'},
}
coloredlogs.DEFAULT_FIELD_STYLES = {
    'asctime': {'color': 'green'},
    'hostname': {'color': 'magenta'},
    'levelname': {'color': 'black', 'bright': True},
    'name': {'color': 'blue'},
    'programname': {'color': 'cyan'}
}


class ColoredFileHandler(logging.FileHandler):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setFormatter(
            coloredlogs.ColoredFormatter(format)
        )


class ColoredStreamHandler(logging.StreamHandler):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setFormatter(
            coloredlogs.ColoredFormatter(format)
        )


def _handlers(name):
    handlers = [ColoredStreamHandler()]

    log_dir = os.getenv('LOG_DIR')
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        filename = os.path.join(log_dir, '{}.log'.format(name or 'nftledger'))
        handlers.append(logging.FileHandler(filename, delay=True))
        handlers.append(ColoredFileHandler('{}_color'.format(filename), delay=True))

    return handlers


def get_logger(name=''):
    logging.basicConfig(
        format=format,
        handlers=_handlers(name),
        level=logging.DEBUG
    )

    log = logging.getLogger(name)
    log.setLevel(_LOG_LVL)

    for log_name, log_level in CUSTOM_LEVELS.items():
        apply_custom_level(log, log_name, log_level)

    return log


def overwrite_logger_level(level):
    global _LOG_LVL
    _LOG_LVL = level

    for name in list(logging.Logger.manager.loggerDict.keys()):
        log = logging.getLogger(name)
        log.setLevel(level)
