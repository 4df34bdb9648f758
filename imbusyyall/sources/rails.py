"""
Rails - Ruby on Rails development log style
"""
import random
from typing import List

from .. import utils
from ..colors import Colors, colorize, status_color
from .base import DataSource


class RailsSource(DataSource):
    """Request cycles, background jobs and exceptions from a Rails app"""

    name = "rails"
    description = "Ruby on Rails request, job and exception logs"

    CONTROLLERS = [
        "RecipesController", "IngredientsController", "MealsController",
        "RestaurantsController", "ChefsController", "MenusController",
        "DishesController", "CategoriesController", "ReviewsController",
        "OrdersController", "ReservationsController", "InventoryController",
        "NutritionController",
    ]

    ACTIONS = [
        "index", "show", "create", "update", "destroy", "edit", "new", "search",
        "filter", "calculate_calories", "generate_menu", "process_order",
        "start_cooking", "monitor_temperature", "serve", "archive", "feature",
        "recommend", "validate", "bulk_update", "search_by_ingredient",
    ]

    HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

    FORMATS = ["html", "json", "xml", "csv", "pdf"]

    STATUS_MESSAGES = {
        200: "OK",
        201: "Created",
        302: "Found",
        304: "Not Modified",
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        422: "Unprocessable Entity",
        500: "Internal Server Error",
    }

    TABLES = [
        "users", "recipes", "ingredients", "meals", "restaurants", "chefs",
        "menus", "dishes", "categories", "reviews", "orders", "reservations",
        "inventory", "allergies", "cooking_methods", "cuisines",
        "nutrition_facts", "dietary_restrictions",
    ]

    SQL_OPERATIONS = [
        "SELECT * FROM",
        "SELECT id, name, description FROM",
        "SELECT id, status, created_at FROM",
        "SELECT COUNT(*) FROM",
        "INSERT INTO",
        "UPDATE",
        "DELETE FROM",
    ]

    SQL_CONDITIONS = [
        "WHERE id = ?",
        "WHERE status = ?",
        "WHERE restaurant_id = ? AND created_at > ?",
        "WHERE created_at BETWEEN ? AND ?",
        "WHERE name LIKE ?",
        "WHERE name = ? OR category = ?",
        "WHERE deleted_at IS NULL",
        "ORDER BY created_at DESC LIMIT 10",
        "GROUP BY category_id",
        "LEFT JOIN ingredients ON ingredients.id = recipes.ingredient_id",
    ]

    ROUTES = [
        "/recipes", "/ingredients", "/meals", "/restaurants", "/admin/recipes",
        "/admin/restaurants", "/admin/reports", "/admin/dashboard",
        "/api/v1/recipes", "/api/v1/ingredients", "/api/v1/users",
        "/api/v1/orders", "/recipes/123/ingredients", "/restaurants/456/menus",
        "/reports/monthly", "/reports/popular_dishes", "/settings", "/profile",
    ]

    PARAMETERS = [
        '{{"id":{id}}}',
        '{{"restaurant_id":{id},"page":{page}}}',
        '{{"search":"pasta"}}',
        '{{"start_date":"2024-01-01","end_date":"2024-06-30"}}',
        '{{"status":"active"}}',
        '{{"recipe":{{"name":"Chocolate Cake","chef_id":{id}}}}}',
        '{{"dish":{{"recipe_id":{id},"portions":{page}}}}}',
        '{{"format":"json"}}',
        '{{"sort_by":"rating","direction":"desc"}}',
    ]

    WORKER_CLASSES = [
        "RecipeNotificationWorker", "EmailDeliveryWorker", "MenuExportWorker",
        "InventoryReminderWorker", "OrderProcessingJob", "IngredientStockJob",
    ]

    CACHE_KEYS = [
        "views/recipes/123-20240615063022",
        "users/456-20240610124532",
        "menus/789/dishes-20240612081345",
        "restaurant_123/reports/monthly-20240601093012",
        "active_orders_count-20240614150023",
    ]

    EXCEPTIONS = [
        "ActiveRecord::RecordNotFound: Couldn't find Recipe with 'id'=12345",
        "ActiveRecord::RecordInvalid: Validation failed: Name can't be blank",
        "NoMethodError: undefined method `ingredients' for nil:NilClass",
        "ActionController::ParameterMissing: param is missing or the value is empty: recipe",
        "Pundit::NotAuthorizedError: not allowed to edit? this Recipe",
    ]

    BACKTRACE_ENTRIES = [
        "app/controllers/recipes_controller.rb:45:in `show'",
        "app/models/recipe.rb:123:in `calculate_calories'",
        "app/services/meal_planner_service.rb:67:in `process_weekly_plan'",
        "lib/nutrition_calculator.rb:89:in `update_values'",
        "app/jobs/order_notification_job.rb:34:in `perform'",
    ]

    def generate_log_entry(self) -> List[str]:
        roll = random.randrange(10)
        if roll <= 6:
            return [
                self._request_line(),
                self._processing_line(),
                self._parameters_line(),
                self._sql_line(),
                self._sql_line(),
                self._cache_line() if random.random() < 0.3 else self._sql_line(),
                self._rendering_line(),
                self._completed_line(),
            ]
        if roll == 7:
            return [self._worker_line()]
        if roll == 8:
            return [self._sidekiq_line()]
        return [
            self._request_line(),
            self._processing_line(),
            self._parameters_line(),
            self._sql_line(),
            colorize(self.pick(self.EXCEPTIONS), Colors.RED),
            *[colorize(self.pick(self.BACKTRACE_ENTRIES), Colors.GRAY) for _ in range(3)],
        ]

    def _request_line(self) -> str:
        method = colorize(self.pick(self.HTTP_METHODS), Colors.GREEN)
        return f'Started {method} "{self.pick(self.ROUTES)}" for {utils.ip_address()} at {utils.timestamp()}'

    def _processing_line(self) -> str:
        target = colorize(f"{self.pick(self.CONTROLLERS)}#{self.pick(self.ACTIONS)}", Colors.YELLOW)
        return f"Processing by {target} as {self.pick(self.FORMATS).upper()}"

    def _parameters_line(self) -> str:
        context = {"id": random.randrange(1000), "page": random.randrange(10)}
        return f"  Parameters: {self.fill(self.pick(self.PARAMETERS), context)}"

    def _sql_line(self) -> str:
        query = f"{self.pick(self.SQL_OPERATIONS)} {self.pick(self.TABLES)} {self.pick(self.SQL_CONDITIONS)}"
        duration = utils.random_duration(0.5, 20.0)
        return f"  {colorize(query, Colors.BLUE)}  {colorize(f'[{duration}ms]', Colors.GRAY)}"

    def _cache_line(self) -> str:
        hit_or_miss = self.pick(["hit", "miss"])
        duration = utils.random_duration(0.1, 5.0)
        return "  " + colorize(f"Cache {hit_or_miss} {self.pick(self.CACHE_KEYS)} ({duration}ms)", Colors.CYAN)

    def _rendering_line(self) -> str:
        view = f"{self.pick(self.CONTROLLERS).replace('Controller', '').lower()}/{self.pick(self.ACTIONS)}.html.slim"
        duration = utils.random_duration(1.0, 100.0)
        allocations = random.randint(1000, 5000)
        return "  " + colorize(f"Rendered {view} (Duration: {duration}ms | Allocations: {allocations})", Colors.MAGENTA)

    def _completed_line(self) -> str:
        status = self.pick(list(self.STATUS_MESSAGES))
        return (
            f"Completed {colorize(status, status_color(status))} {self.STATUS_MESSAGES[status]} "
            f"in {utils.random_duration(50.0, 500.0)}ms "
            f"(Views: {utils.random_duration(10.0, 200.0)}ms | "
            f"ActiveRecord: {utils.random_duration(5.0, 100.0)}ms | "
            f"Allocations: {random.randint(10_000, 50_000)})"
        )

    def _worker_line(self) -> str:
        duration = utils.random_duration(10.0, 2000.0)
        return f"{colorize('[ActiveJob]', Colors.CYAN)} [{utils.hex_id(24)}] Performed {self.pick(self.WORKER_CLASSES)} in {duration}ms"

    def _sidekiq_line(self) -> str:
        return f"{colorize('[Sidekiq]', Colors.BRIGHT_BLUE)} {self.pick(self.WORKER_CLASSES)} JID-{utils.hex_id(24)} INFO: start"
