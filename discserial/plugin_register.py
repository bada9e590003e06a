from typing import Dict, Optional, Type
from discserial.ifilter import IFilter
from discserial.sheet_filter import CueFilter, GdiFilter, ImageFilter


class PluginRegister:
    _instance = None

    def __init__(self):
        self.media_images: Dict[str, Type[IFilter]] = {}

    @classmethod
    def get_instance(cls) -> 'PluginRegister':
        if cls._instance is None:
            cls._instance = cls()
            cls._instance.register_media_image("CUE", CueFilter)
            cls._instance.register_media_image("GDI", GdiFilter)
            cls._instance.register_media_image("Image", ImageFilter)
        return cls._instance

    def register_media_image(self, name: str, filter_class: Type[IFilter]):
        self.media_images[name.lower()] = filter_class

    def get_filter(self, path: str) -> Optional[IFilter]:
        for filter_class in self.media_images.values():
            filter_instance = filter_class(path)
            if filter_instance.identify(path):
                return filter_instance
        return None
