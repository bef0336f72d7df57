__app_name__ = "ArtiLens"
__version__ = "0.1.0"
