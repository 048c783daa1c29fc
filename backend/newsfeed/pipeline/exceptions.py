class PipelineError(Exception):
    """Base pipeline exception"""
    pass

class NewsFetchError(PipelineError):
    """The news source failed for the whole batch"""
    def __init__(self, message: str, payload: dict | None = None):
        self.payload = payload or {}
        super().__init__(message)

class DuplicateArticleError(PipelineError):
    """An article with the same url is already stored"""
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Article already exists: {url}")

class ArticleNotFoundError(PipelineError):
    """Article does not exist"""
    def __init__(self, article_id: int):
        self.article_id = article_id
        super().__init__(f"Article {article_id} not found")

class PreferencesRequiredError(PipelineError):
    """Reader has not selected any categories yet"""
    pass

class InvalidCategoryError(PipelineError):
    """Unknown category ids in a preference update"""
    def __init__(self, category_ids: list[int]):
        self.category_ids = category_ids
        super().__init__(f"Unknown categories: {category_ids}")
