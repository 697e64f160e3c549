import logging
import os

from shortuuid import uuid

from .constants import SeqMapNamespace

logger = logging.getLogger('seqmap')


class WeakSeqMapNamespace(SeqMapNamespace):
    """
    namespace whose members can all be overridden by their environment variables
    """

    def is_env_overwritable(self, attr):
        return True


def generate_id():
    """
    short unique identifier used for annotations created without one
    """
    return uuid()


def log_arguments(args):
    """
    output the arguments to the console

    Args:
        args (Namespace): the namespace to print arguments for
    """
    logger.info('arguments')

    indent = ' '

    for arg, val in sorted(args.__dict__.items()):
        if isinstance(val, list):
            if len(val) <= 1:
                logger.info(f'{indent}{arg} = {val}')
                continue
            logger.info(f'{indent}{arg} = [')
            for v in val:
                logger.info(f'{indent * 2}{repr(v)}')
            logger.info(f'{indent}]')
        elif any([isinstance(val, typ) for typ in [str, int, float, bool, tuple]]) or val is None:
            logger.info(f'{indent}{arg} = {repr(val)}')
        else:
            logger.info(f'{indent}{arg} = {object.__repr__(val)}')


def mkdirp(dirname):
    """
    Make a directory or path of directories. Suppresses the error that is normally raised when the directory already exists
    """
    logger.info(f"creating output directory: '{dirname}'")
    os.makedirs(dirname, exist_ok=True)
    return dirname
