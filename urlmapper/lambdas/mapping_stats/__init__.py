from urlmapper.utils import initialize_logging


initialize_logging()
