"""간단한 .g 파일 로더"""

from __future__ import annotations
from pathlib    import Path
from typing     import Union

from ..errors   import GrammarError


def load_grammar_text(path: Union[str, Path]) -> str:
    """
    Load Grammar Text (UTF-8, 개행은 '\\n'으로 통일)
    - 파일이 없거나 읽을 수 없으면 OSError 그대로 전파
    - UTF-8이 아니면 경로와 줄:칼럼을 담은 GrammarError
    """
    raw = Path(path).read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        good = raw[:e.start].decode("utf-8")
        line = good.count("\n") + 1
        col = len(good) - (good.rfind("\n") + 1) + 1
        raise GrammarError(
            f"{path}: not valid UTF-8 at {line}:{col} (byte 0x{raw[e.start]:02x})"
        ) from None
    return text.replace("\r\n", "\n").replace("\r", "\n")
