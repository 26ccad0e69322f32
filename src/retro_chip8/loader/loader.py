# retro_chip8/loader/loader.py
"""
プログラムローダーモジュール。
ヘッダを持たない生バイナリ形式の CHIP-8 ROM ファイルを読み込みます。
"""
import logging

from retro_chip8.common.errors import ProgramIOError

logger = logging.getLogger(__name__)


class BinaryRomLoader:
    """
    ROMファイルをバイト列として読み込むローダー。
    配置（0x200 以降へのコピー）とサイズ検証は Chip8Machine.load が担当します。
    """
    # @intent:responsibility ファイル全体をバイト列として読み込みます。
    # @intent:post-condition 読み込みに失敗した場合は ProgramIOError を送出し、原因となった OSError を __cause__ に保持します。
    def load_binary(self, file_path: str) -> bytes:
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise ProgramIOError(str(file_path), e.strerror or str(e)) from e
        logger.debug("Read %d bytes from %s", len(data), file_path)
        return data
