"""
Log wrapper record pivotal operations along with some information into log file. It's just a wrapper
used like function-wrapper, only the wrapped instance is touched, other instances of the class stay quiet.
"""
import datetime
import functools
import logging
from logging import handlers as log_handlers

from btreemap.constants import DEFAULT_LOGGER_NAME, DEFAULT_LOG_FILE

# if in debug mode
if __debug__:

    def _log_wrapper(func, logger: logging.Logger):
        logger.setLevel(logging.DEBUG)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = 'Called: ' + func.__name__ + '('
            # !r means call __repr__ only / !s means call __str__ only
            log += ','.join(['{0!r}'.format(a) for a in args] + ['{0!s}={1!r}'.format(k, v) for k, v in
                                                                 kwargs.items()])
            try:
                result = func(*args, **kwargs)
            except Exception as error:
                log += ') {0}: {1} '.format(type(error).__name__, error)
                logger.debug(log + 'at {time}'.format(time=datetime.datetime.now().isoformat()))
                raise
            log += ') -> {0!r} '.format(result)
            logger.debug(log + 'at {time}'.format(time=datetime.datetime.now().isoformat()))
            return result

        return wrapper

else:
    def _log_wrapper(func, logger: logging.Logger):
        logger.setLevel(logging.INFO)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = 'Called:' + func.__name__ + '('
            log += ','.join(['{0}'.format(a) for a in args] + ['{0}={1}'.format(k, v) for k, v in
                                                               kwargs.items()])
            log += ') at {time}'.format(time=datetime.datetime.now().isoformat())
            logger.info(log)
            return func(*args, **kwargs)

        return wrapper


class _LoggedProxy(object):
    """
    Forward everything to the wrapped instance except the logged methods.
    Instances with __slots__ can't take per-instance attributes, so the
    logged methods live on this proxy instead.
    """

    def __init__(self, target, logger: logging.Logger, handler: logging.Handler, methods: dict):
        self.__dict__.update(methods)
        self._target = target
        self._logger = logger
        self._handler = handler

    def __getattr__(self, name):
        return getattr(self._target, name)

    def __contains__(self, key):
        return key in self._target

    def __len__(self):
        return len(self._target)

    def __getitem__(self, key):
        return self._target[key]

    # mutations go through the (possibly logged) insert/delete of this proxy
    def __setitem__(self, key, value):
        self.insert(key, value, override=True)

    def remove(self, key):
        if self.delete(key) is None:
            raise KeyError('{key} not in {self}'.format(key=key, self=self._target.__class__.__name__))

    __delitem__ = remove

    def __str__(self):
        return str(self._target)

    def __repr__(self):
        return repr(self._target)


def log_wrapper(instance, methods_to_log: tuple, log_mode='local', host=None, port=None,
                log_file=DEFAULT_LOG_FILE):
    """
    :param instance: instance to be logged
    :param methods_to_log: methods of instance to be logged (both method name, parameters, time
                           of invoking will be logged)
    :param log_mode: 'local': log in local file (`log_file`)
                     'tcp' or 'udp': log to concrete host & port
    :param host: target host if log mode is 'tcp' or 'udp'
    :param port: port of target host if log mode is 'tcp' or 'udp'
    :param log_file: file to append records to if log mode is 'local'
    :return: wrapped instance
    """
    if log_mode == 'tcp' or log_mode == 'udp':
        if host is None or port is None:
            raise ValueError('Host and port of Log Socket should be specified')
        handler = log_handlers.SocketHandler(host=host,
                                             port=port) if log_mode == 'tcp' else log_handlers.DatagramHandler(
            host=host, port=port)
    elif log_mode == 'local':
        handler = logging.FileHandler(log_file, mode='a')
    else:
        raise ValueError('No such log mode:{mode}'.format(mode=log_mode))
    handler.setFormatter(logging.Formatter('%(name)s %(levelname)s %(message)s'))

    # one logger per instance, otherwise handlers of different trees pile up. It is kept out of
    # the logging registry so released instances leave nothing behind.
    logger = logging.Logger('{base}.{cls}'.format(base=DEFAULT_LOGGER_NAME, cls=instance.__class__.__name__))
    logger.parent = logging.getLogger(DEFAULT_LOGGER_NAME)
    logger.addHandler(handler)

    logged_methods = {method: _log_wrapper(getattr(instance, method), logger)
                      for method in methods_to_log if hasattr(instance, method)}

    return _LoggedProxy(instance, logger, handler, logged_methods)


def release_log(wrapped):
    """
    Detach and close the handler attached by `log_wrapper`.
    :return: the original instance.
    """
    wrapped._logger.removeHandler(wrapped._handler)
    wrapped._handler.close()
    return wrapped._target
