"""
Network Design Kernel — Constants (Default Values)

All magic numbers live here as module-level defaults: reserved VLANs,
address offsets, layout geometry, hardware prices and install rates.
"""

# --- Reserved VLANs ---
MANAGEMENT_VLAN_ID: int = 10
VOIP_VLAN_ID: int = 70
SERVERS_VLAN_ID: int = 90
DMZ_VLAN_ID: int = 102
SOHO_LAN_VLAN_ID: int = 1

MANAGEMENT_SUBNET: str = "192.168.10.0/24"
MANAGEMENT_GATEWAY: str = "192.168.10.1"

DHCP_STATIC: str = "Static"
DHCP_NONE: str = "N/A"
DHCP_FIRST_HOST: int = 10

# --- Address plan octets (inclusive ranges) ---
ROUTED_BASE_RANGE = (1, 250)   # 10.R
SOHO_BASE_RANGE = (1, 254)     # 192.168.R
DMZ_RANGE = (0, 9)             # 172.16.x

# --- Server addressing (last octet inside SERVERS / DMZ) ---
DHCP_SERVER_HOST: int = 10
DNS_SERVER_HOST: int = 11
AAA_SERVER_HOST: int = 12
WEB_SERVER_HOST: int = 10

# --- Access layer ---
EMPLOYEES_PER_ACCESS_SWITCH: int = 20
ACCESS_SWITCH_PORTS: int = 24
END_DEVICES_PER_SWITCH: int = 4

# --- Layout geometry ---
DIAGRAM_MIN_WIDTH: int = 1200
DIAGRAM_HEIGHT: int = 800
DIAGRAM_MARGIN: int = 100
ACCESS_SWITCH_PITCH: int = 250
ACCESS_SWITCH_START_X: int = 100
END_DEVICE_ROW_OFFSET: int = 100
END_DEVICE_X_OFFSETS = (-75, -25, 25, 75)
SERVER_ROW_Y: int = 450
SERVER_START_X: int = 150
SERVER_PITCH: int = 120
DMZ_SERVER_POSITION = (600, 250)

# --- Hardware price table (currency-agnostic) ---
DEVICE_PRICES = {
    "1941 ISR": 25000,
    "2960-24TT": 6000,
    "4321 ISR": 38000,
    "3650-24PS": 35000,
    "ASA 5506-X": 30000,
    "2911 Router": 25000,
}

# --- Config templates ---
SECURITY_BASELINE: str = "enable secret class\nservice password-encryption"
HSRP_PRIMARY_PRIORITY: int = 110
HSRP_SECONDARY_PRIORITY: int = 100
VOICE_EXTENSION_POOL: int = 20
