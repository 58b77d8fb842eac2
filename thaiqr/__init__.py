"""
Thai QR payment payloads (PromptPay / Bill Payment) following the EMVCo
merchant-presented QR format.
"""
