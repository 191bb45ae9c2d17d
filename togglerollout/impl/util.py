import logging

log = logging.getLogger('togglerollout')
