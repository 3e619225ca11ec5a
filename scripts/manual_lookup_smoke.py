# scripts/manual_lookup_smoke.py
"""
Poke a locally running server (python -m telerelay).

Lookups are cheap but not free; the SMS step only runs with --sms.
"""
import sys

import requests

BASE_URL = "http://127.0.0.1:1337"


def main():
    numbers = sys.argv[1:] or ["+15555555555"]
    send_sms = "--sms" in numbers
    numbers = [n for n in numbers if n != "--sms"]

    resp = requests.post(f"{BASE_URL}/lookups", json={"phoneNumbers": numbers})
    print("Status:", resp.status_code)
    print("Body:", resp.text)

    if send_sms:
        people = [{"firstName": "Tester", "lastName": str(i), "phoneNumber": n} for i, n in enumerate(numbers)]
        resp = requests.post(
            f"{BASE_URL}/broadcastSMS",
            json={"people": people, "message": "Hi firstName lastName, this is a telerelay test."},
        )
        print("Status:", resp.status_code)
        print("Body:", resp.text)


if __name__ == "__main__":
    main()
