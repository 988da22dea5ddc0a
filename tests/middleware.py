class ReportsURLConfMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.path.startswith("/reports/"):
            request.urlconf = "tests.reports_urls"
        return self.get_response(request)
