from certverify.codes.base import BaseCodeReader
from certverify.codes.opencv_adapter import OpenCvCodeReader
from certverify.config.settings import Settings


class CodeReaderFactory:
    """Creates the embedded-code reader selected in settings."""

    ADAPTERS: dict[str, type[BaseCodeReader]] = {
        "opencv": OpenCvCodeReader,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseCodeReader:
        engine = settings.code_reader_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown code reader engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
