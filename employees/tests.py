from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from employees.models import Employee


class EmployeeTests(APITestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(username='hr', password='pass')
        self.client.force_authenticate(self.user)
        Employee.objects.create(first_name='Ana', last_name='Cruz', position='Engineer', email='ana@example.com')
        Employee.objects.create(
            first_name='Ben', last_name='Abad', position='Clerk',
            status=Employee.STATUS_INACTIVE, employee_code='EMP-002',
        )

    def test_list_employees_ordered_by_name(self):
        resp = self.client.get(reverse('employees:employee-list'))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([row['last_name'] for row in resp.data], ['Abad', 'Cruz'])

    def test_filter_and_search(self):
        resp = self.client.get(reverse('employees:employee-list'), {'status': 'Inactive'})
        self.assertEqual([row['first_name'] for row in resp.data], ['Ben'])

        resp = self.client.get(reverse('employees:employee-list'), {'search': 'ana@'})
        self.assertEqual([row['first_name'] for row in resp.data], ['Ana'])

        resp = self.client.get(reverse('employees:employee-list'), {'search': 'emp-002'})
        self.assertEqual([row['first_name'] for row in resp.data], ['Ben'])

    def test_create_employee(self):
        resp = self.client.post(
            reverse('employees:employee-list'),
            {'first_name': ' Carla ', 'last_name': 'Diaz', 'position': 'Analyst', 'salary': '30000.00'},
            format='json',
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        employee = Employee.objects.get(id=resp.data['id'])
        self.assertEqual(employee.first_name, 'Carla')
        self.assertEqual(employee.status, Employee.STATUS_ACTIVE)
        self.assertEqual(employee.salary, Decimal('30000.00'))

    def test_create_rejects_negative_salary(self):
        resp = self.client.post(
            reverse('employees:employee-list'),
            {'first_name': 'Dan', 'last_name': 'Lim', 'position': 'Analyst', 'salary': '-1'},
            format='json',
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('salary', resp.data['errors'])

    def test_payroll_input_without_salary(self):
        employee = Employee.objects.get(first_name='Ana')
        info = employee.to_payroll_input()
        self.assertEqual(info.id, employee.id)
        self.assertEqual(info.salary, Decimal('0.00'))
        self.assertEqual(info.full_name, 'Ana Cruz')
        self.assertFalse(Employee.objects.get(first_name='Ben').is_active)
