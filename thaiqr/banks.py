"""
Bank of Thailand member banks, keyed by 3-digit bank code.

Display metadata only: payload building never consults this table.
"""

from types import MappingProxyType
from typing import List, Optional

from thaiqr.models import BankEntry

_BANKS = (
    BankEntry("002", "ธนาคารกรุงเทพ", "BBL", "#1e4598"),
    BankEntry("004", "ธนาคารกสิกรไทย", "KBANK", "#138f2d"),
    BankEntry("006", "ธนาคารกรุงไทย", "KTB", "#1ba5e0"),
    BankEntry("011", "ธนาคารทหารไทยธนชาต", "TTB", "#0066b3"),
    BankEntry("014", "ธนาคารไทยพาณิชย์", "SCB", "#4e2a84"),
    BankEntry("017", "ธนาคารซิตี้แบงก์", "CITI", "#003b70"),
    BankEntry("020", "ธนาคารสแตนดาร์ดชาร์เตอร์ด", "SCBT", "#0a7b3e"),
    BankEntry("022", "ธนาคารซีไอเอ็มบีไทย", "CIMB", "#7b0c1c"),
    BankEntry("024", "ธนาคารยูโอบี", "UOB", "#0033a0"),
    BankEntry("025", "ธนาคารกรุงศรีอยุธยา", "BAY", "#fec43b"),
    BankEntry("030", "ธนาคารออมสิน", "GSB", "#eb198e"),
    BankEntry("033", "ธนาคารอาคารสงเคราะห์", "GHB", "#f7941d"),
    BankEntry("034", "ธนาคารเพื่อการเกษตรและสหกรณ์", "BAAC", "#4fa94d"),
    BankEntry("066", "ธนาคารอิสลามแห่งประเทศไทย", "ISBT", "#0f6838"),
    BankEntry("067", "ธนาคารทิสโก้", "TISCO", "#12308b"),
    BankEntry("069", "ธนาคารเกียรตินาคินภัทร", "KKP", "#004c9b"),
    BankEntry("071", "ธนาคารไทยเครดิต", "TCRT", "#ee7724"),
    BankEntry("073", "ธนาคารแลนด์ แอนด์ เฮ้าส์", "LHFG", "#6c489e"),
)

THAI_BANKS = MappingProxyType({b.code: b for b in _BANKS})


def lookup_bank(code: str) -> Optional[BankEntry]:
    return THAI_BANKS.get((code or "").strip())


def list_banks() -> List[BankEntry]:
    return sorted(THAI_BANKS.values(), key=lambda b: b.code)
