"""
Match Field Validators
ตรวจ syntax/range ของ match fields ทีละ field

ทุกฟังก์ชันเป็น pure function — ค่าที่ผิดจะกลายเป็นข้อความใน errors/warnings
ไม่มีการ raise exception
"""
import re
from typing import List, Optional, Tuple

from flowcheck.schemas.flow import FlowMatchFields

MAC_PATTERN = re.compile(r"^([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})$")
INTEGER_PATTERN = re.compile(r"^-?[0-9]+$")

PORT_MIN, PORT_MAX = 0, 65535
VLAN_MIN, VLAN_MAX = 1, 4094            # 0 และ 4095 reserved (802.1Q)
CIDR_MIN, CIDR_MAX = 0, 32
PORT_PROTOCOLS = ("TCP", "UDP")


def _parse_int(text: str) -> Optional[int]:
    if not INTEGER_PATTERN.match(text):
        return None
    return int(text)


def is_valid_ip(ip: str) -> bool:
    """IPv4 แบบ dotted quad พร้อม /prefix (optional) เช่น '192.168.1.0/24'"""
    parts = ip.split("/")
    if len(parts) > 2:
        return False

    octets = parts[0].split(".")
    if len(octets) != 4:
        return False

    for octet in octets:
        num = _parse_int(octet)
        if num is None or num < 0 or num > 255:
            return False

    if len(parts) == 2:
        cidr = _parse_int(parts[1])
        if cidr is None or cidr < CIDR_MIN or cidr > CIDR_MAX:
            return False

    return True


def is_valid_mac(mac: str) -> bool:
    return bool(MAC_PATTERN.match(mac))


def _in_range(value: Optional[int], low: int, high: int) -> bool:
    return value is None or low <= value <= high


def validate_match_fields(match: FlowMatchFields) -> Tuple[List[str], List[str]]:
    """
    Validate match fields ทั้งหมด

    Returns:
        (errors, warnings)
    """
    errors: List[str] = []
    warnings: List[str] = []

    # IP
    if match.src_ip and not is_valid_ip(match.src_ip):
        errors.append(f"Invalid source IP format: {match.src_ip}")
    if match.dst_ip and not is_valid_ip(match.dst_ip):
        errors.append(f"Invalid destination IP format: {match.dst_ip}")

    # MAC
    if match.src_mac and not is_valid_mac(match.src_mac):
        errors.append(f"Invalid source MAC format: {match.src_mac}")
    if match.dst_mac and not is_valid_mac(match.dst_mac):
        errors.append(f"Invalid destination MAC format: {match.dst_mac}")

    # Ports
    if not _in_range(match.src_port, PORT_MIN, PORT_MAX):
        errors.append("Source port must be between 0 and 65535")
    if not _in_range(match.dst_port, PORT_MIN, PORT_MAX):
        errors.append("Destination port must be between 0 and 65535")

    # VLAN
    if not _in_range(match.vlan_id, VLAN_MIN, VLAN_MAX):
        errors.append("VLAN ID must be between 1 and 4094")

    # Protocol + Port consistency (advisory: HTTP/HTTPS ยังเป็น TCP ได้)
    has_port = match.src_port is not None or match.dst_port is not None
    if has_port and match.protocol and match.protocol not in PORT_PROTOCOLS:
        warnings.append("Ports only apply to TCP or UDP protocols")

    return errors, warnings
