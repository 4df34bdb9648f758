"""
Django - development server, ORM, cache and Celery logs
"""
import random
from typing import List

from .. import utils
from ..colors import Colors, colorize, status_color
from .base import DataSource

LOG_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class DjangoSource(DataSource):
    """Logs from a Django project with Celery workers attached"""

    name = "django"
    description = "Django runserver, ORM, cache, Celery and management logs"

    URL_PATTERNS = [
        "/api/v1/users/", "/api/v1/users/{pk}/", "/api/v1/products/",
        "/api/v1/products/{pk}/reviews/", "/api/v1/orders/",
        "/api/v1/orders/{order_id}/", "/api/v1/auth/login/",
        "/api/v1/auth/logout/", "/api/v1/auth/token/refresh/", "/admin/",
        "/admin/auth/user/", "/admin/shop/product/", "/admin/blog/post/add/",
        "/accounts/login/", "/accounts/register/", "/accounts/password/reset/",
        "/blog/", "/blog/{slug}/", "/shop/cart/", "/shop/checkout/",
        "/api/graphql/", "/api/schema/", "/__debug__/sql/", "/media/uploads/",
        "/static/css/main.css", "/static/js/app.js", "/health/", "/metrics/",
    ]

    VIEWS = [
        "django.contrib.admin.sites.index",
        "django.contrib.auth.views.LoginView",
        "django.contrib.auth.views.LogoutView",
        "shop.views.ProductListView",
        "shop.views.ProductDetailView",
        "blog.views.PostListView",
        "blog.views.PostDetailView",
        "api.views.UserViewSet",
        "api.views.OrderViewSet",
        "accounts.views.ProfileView",
        "accounts.views.RegisterView",
        "core.views.HomeView",
        "analytics.views.DashboardView",
    ]

    HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

    STATUS_CODES = [200, 201, 204, 301, 302, 304, 400, 401, 403, 404, 405, 422, 500, 502, 503]

    ERRORS = [
        "DoesNotExist: User matching query does not exist.",
        "MultipleObjectsReturned: get() returned more than one User -- it returned 2!",
        "ValidationError: {'email': ['Enter a valid email address.']}",
        "PermissionDenied: You do not have permission to perform this action.",
        "Http404: No Product matches the given query.",
        "ImproperlyConfigured: The SECRET_KEY setting must not be empty.",
        "FieldError: Cannot resolve keyword 'user_id' into field.",
        "IntegrityError: UNIQUE constraint failed: auth_user.username",
        "OperationalError: no such table: shop_product",
        "ProgrammingError: relation 'blog_post' does not exist",
        "SuspiciousOperation: Invalid HTTP_HOST header",
        "DisallowedHost: Invalid HTTP_HOST header: 'example.com'",
        "TemplateDoesNotExist: 404.html",
    ]

    SQL_QUERIES = [
        'SELECT "auth_user"."id", "auth_user"."username" FROM "auth_user" WHERE "auth_user"."is_active" = True',
        'SELECT COUNT(*) AS "__count" FROM "shop_product" WHERE "shop_product"."category_id" = 1',
        'INSERT INTO "blog_post" ("title", "slug", "content", "created_at") VALUES (%s, %s, %s, %s)',
        'UPDATE "shop_order" SET "status" = %s WHERE "shop_order"."id" = %s',
        'DELETE FROM "django_session" WHERE "django_session"."expire_date" < %s',
        'SELECT "shop_product"."id" FROM "shop_product" INNER JOIN "shop_category" ON ("shop_product"."category_id" = "shop_category"."id")',
        'BEGIN; INSERT INTO "auth_user" ... COMMIT;',
        'SAVEPOINT "s140735624254208_x1"',
        'RELEASE SAVEPOINT "s140735624254208_x1"',
        'SELECT "django_migrations"."app", "django_migrations"."name" FROM "django_migrations"',
    ]

    CACHE_OPERATIONS = {
        'cache.get("user_profile_123")': None,
        'cache.set("product_list_page_1", queryset, 300)': "STORED",
        'cache.delete("session_abc123")': "DELETED",
        "cache.clear()": "OK",
        'cache.get_many(["key1", "key2", "key3"])': None,
        'cache.touch("api_response_456", 3600)': "OK",
    }

    CELERY_TASKS = [
        "shop.tasks.process_order",
        "accounts.tasks.send_welcome_email",
        "analytics.tasks.generate_report",
        "blog.tasks.update_search_index",
        "core.tasks.cleanup_expired_sessions",
        "notifications.tasks.send_push_notification",
    ]

    MANAGEMENT_COMMANDS = [
        "migrate", "makemigrations", "collectstatic", "createsuperuser",
        "runserver", "shell", "test", "check", "dbshell", "dumpdata", "loaddata",
    ]

    SECURITY_WARNINGS = [
        "Forbidden (CSRF token missing or incorrect.): {path}",
        "Forbidden (Origin checking failed - https://evil.com does not match any trusted origins.)",
        "You're using the staticfiles app without having set the STATIC_ROOT setting.",
        "Invalid HTTP_HOST header: '192.168.1.1'. You may need to add '192.168.1.1' to ALLOWED_HOSTS.",
        "UserWarning: A {{% csrf_token %}} was used in a template, but the context did not provide the value.",
    ]

    ERROR_LINES = [
        "user = User.objects.get(pk=user_id)",
        "product.category.name",
        "return render(request, 'shop/product_list.html', context)",
        "serializer.is_valid(raise_exception=True)",
        "order.items.all().delete()",
    ]

    def generate_log_entry(self) -> List[str]:
        roll = random.randrange(100)
        if roll <= 50:
            return self._request_logs()
        if roll <= 65:
            return self._database_logs()
        if roll <= 75:
            return self._error_logs()
        if roll <= 83:
            return [self._cache_log()]
        if roll <= 90:
            return [self._celery_log()]
        if roll <= 95:
            return [self._management_log()]
        return [self._security_log()]

    def _url(self) -> str:
        return self.fill(self.pick(self.URL_PATTERNS), {
            "pk": random.randint(1, 1000),
            "order_id": utils.uuid(),
            "slug": f"post-{random.randrange(100)}",
        })

    def _stamp(self, color: str = Colors.GRAY) -> str:
        return colorize(f"[{utils.now(LOG_TIME_FORMAT)}]", color)

    def _request_logs(self) -> List[str]:
        status = self.pick(self.STATUS_CODES)
        logs = [
            f"{colorize(utils.now('[%d/%b/%Y %H:%M:%S]'), Colors.GRAY)} "
            f'"{self.pick(self.HTTP_METHODS)} {self._url()} HTTP/1.1" '
            f"{colorize(status, status_color(status))} {random.randint(100, 50000)}"
        ]
        if status >= 400 and random.random() < 0.2:
            logs.append(self._traceback())
        return logs

    def _traceback(self) -> str:
        view = self.pick(self.VIEWS)
        return "\n".join([
            "Traceback (most recent call last):",
            '  File "/usr/local/lib/python3.9/site-packages/django/core/handlers/exception.py", line 47, in inner',
            "    response = get_response(request)",
            '  File "/usr/local/lib/python3.9/site-packages/django/core/handlers/base.py", line 181, in _get_response',
            "    response = wrapped_callback(request, *callback_args, **callback_kwargs)",
            f'  File "/app/{view.replace(".", "/")}.py", line {random.randint(10, 200)}, in {view.rsplit(".", 1)[-1]}',
            f"    {self.pick(self.ERROR_LINES)}",
        ])

    def _query_args(self) -> str:
        roll = random.randrange(3)
        if roll == 0:
            return "()"
        if roll == 1:
            return f"({random.randint(1, 100)},)"
        return f"('{self.pick(['active', 'pending', 'completed'])}', '{utils.now('%Y-%m-%d %H:%M:%S')}')"

    def _database_logs(self) -> List[str]:
        query = self.pick(self.SQL_QUERIES)
        duration = round(random.uniform(0.5, 100.0), 3)
        logs = [
            f"{self._stamp()} {colorize('django.db.backends', Colors.GRAY)} "
            f"({duration}) {colorize(query, Colors.BLUE)}; args={self._query_args()}"
        ]
        if query.startswith("SELECT") and random.random() < 0.1:
            logs.append(f"{colorize('[EXPLAIN]', Colors.GRAY)} Seq Scan on auth_user  (cost=0.00..1.52 rows=52 width=161)")
        return logs

    def _error_logs(self) -> List[str]:
        frames = [
            f'  File "/usr/local/lib/python3.9/site-packages/django/db/models/query.py", line {random.randint(400, 500)}, in get',
            "    raise self.model.DoesNotExist(",
            f'  File "/app/shop/models.py", line {random.randint(10, 100)}, in get_absolute_url',
            "    return reverse('shop:product_detail', kwargs={'pk': self.pk})",
        ]
        return [
            f"{self._stamp(Colors.RED)} {colorize('django.request', Colors.RED)} Internal Server Error: {self._url()}",
            colorize(self.pick(self.ERRORS), Colors.RED),
            *[colorize(frame, Colors.GRAY) for frame in frames],
        ]

    def _cache_log(self) -> str:
        operation = self.pick(list(self.CACHE_OPERATIONS))
        result = self.CACHE_OPERATIONS[operation] or ("HIT" if random.random() < 0.7 else "MISS")
        return (
            f"{self._stamp()} {colorize('django.core.cache', Colors.GRAY)} "
            f"{colorize(operation, Colors.MAGENTA)} -> {result}"
        )

    def _celery_log(self) -> str:
        task = f"{self.pick(self.CELERY_TASKS)}[{utils.hex_id(32)}]"
        roll = random.randrange(3)
        if roll == 0:
            color, message = Colors.CYAN, f"Task {task} received"
        elif roll == 1:
            color, message = Colors.GREEN, f"Task {task} succeeded in {random.randint(100, 5000) / 1000.0}s"
        else:
            color, message = Colors.RED, f"Task {task} raised unexpected: {self.pick(self.ERRORS)}"
        return f"{self._stamp(color)} {colorize('celery.worker', color)} {message}"

    def _management_log(self) -> str:
        command = self.pick(self.MANAGEMENT_COMMANDS)
        if command == "migrate":
            return "\n".join([
                colorize("Operations to perform:", Colors.GREEN),
                "  Apply all migrations: admin, auth, contenttypes, sessions, shop",
                colorize("Running migrations:", Colors.GREEN),
                f"  Applying shop.0003_auto_{utils.now('%Y%m%d_%H%M')}... {colorize('OK', Colors.GREEN)}",
            ])
        if command == "collectstatic":
            return "\n".join([
                colorize("You have requested to collect static files.", Colors.CYAN),
                f"{random.randint(50, 200)} static files copied to '/static/'.",
            ])
        if command == "test":
            return "\n".join([
                colorize("Creating test database for alias 'default'...", Colors.YELLOW),
                "System check identified no issues (0 silenced).",
                colorize(f"Ran {random.randint(10, 100)} tests in {round(random.uniform(1, 30), 3)}s", Colors.GREEN),
                colorize("OK", Colors.GREEN),
            ])
        return colorize(f"Executing management command: {command}", Colors.CYAN)

    def _security_log(self) -> str:
        warning = self.fill(self.pick(self.SECURITY_WARNINGS), {"path": self._url()})
        return f"{self._stamp(Colors.YELLOW)} {colorize('django.security', Colors.YELLOW)} {warning}"
