from urlmapper.dao.factory import create_mapping_dao


__all__ = ['create_mapping_dao']
