# Status/event codes
SUCCESS = 'success'
ERROR = 'error'
