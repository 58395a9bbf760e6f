class UpstreamError(Exception):
    """외부 발송 API(알리고 SMS/알림톡, 카카오 이벤트 API) 호출 실패"""

    def __init__(self, provider, message, payload=None):
        super().__init__(f"[{provider}] {message}")
        self.provider = provider
        self.message = message
        self.payload = payload
