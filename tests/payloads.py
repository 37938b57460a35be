"""Canned ipinfo.io responses shared by the tests"""


def details_payload(ip: str = "8.8.8.8", country: str = "US", **overrides) -> dict:
    payload = {
        "ip": ip,
        "hostname": "dns.google",
        "city": "Mountain View",
        "region": "California",
        "country": country,
        "loc": "37.4056,-122.0775",
        "org": "AS15169 Google LLC",
        "postal": "94043",
        "timezone": "America/Los_Angeles",
    }
    payload.update(overrides)
    return payload


def batch_response(ips, country: str = "US") -> dict:
    return {ip: details_payload(ip, country) for ip in ips}
